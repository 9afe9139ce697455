"""
Distribution detection tests.

Covers every source in the fallback order, the fall-through and terminal
error paths of each, and the precedence between sources.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from osdiscovery.core.distribution import (
    STRATEGIES,
    from_system_release_cpe,
    get_distribution_release,
    parse_lsb_release,
    parse_os_release,
    release_number,
)
from osdiscovery.core.errors import UnknownDistributionError, UnknownReleaseError


LSB = ("lsb_release", "-ir")


class TestParsers:
    """Tests for the per-format parsers."""

    def test_parse_os_release(self) -> None:
        """Parses quoted and unquoted values, ignoring comments."""
        data = parse_os_release(
            "# comment\n"
            "ID=ubuntu\n"
            "ID_LIKE=debian\n"
            "VERSION_ID=\"14.04\"\n"
            "\n"
            "HOME_URL=\"http://www.ubuntu.com/\"\n"
        )

        assert data["ID"] == "ubuntu"
        assert data["VERSION_ID"] == "14.04"
        assert data["HOME_URL"] == "http://www.ubuntu.com/"
        assert "# comment" not in data

    def test_parse_lsb_release_indented_labels(self) -> None:
        """Reads labels even when lsb_release indents them."""
        fields = parse_lsb_release(
            "Description:    Red Hat \n Distributor ID: RedHatEnterpriseServer\nRelease:    7.3"
        )

        assert fields == {"Distributor ID": "RedHatEnterpriseServer", "Release": "7.3"}

    def test_release_number(self) -> None:
        """Finds the first integer-like token."""
        assert release_number(" Linux release 7.3.1611 (Core)") == "7.3.1611"
        assert release_number(" release 25 (Twenty Five)") == "25"
        assert release_number(" (no digits)") is None


class TestOsRelease:
    """Tests for the /etc/os-release source."""

    def test_ubuntu(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/os-release": "ID=ubuntu\nID_LIKE=debian\nVERSION_ID=\"14.04\"\nHOME_URL=\"http://www.ubuntu.com/\"",
        })

        assert get_distribution_release(source) == ("ubuntu", "14.04")

    def test_id_is_lower_cased(self, stub_source) -> None:
        source = stub_source(files={"/etc/os-release": "ID=\"CentOS\"\nVERSION_ID=\"7\"\n"})

        assert get_distribution_release(source) == ("centos", "7")

    def test_missing_id_is_unknown_distribution(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/os-release": "\nID_LIKE=debian\nVERSION_ID=\"14.04\"\nHOME_URL=\"http://www.ubuntu.com/\"",
        })

        with pytest.raises(UnknownDistributionError):
            get_distribution_release(source)

    def test_missing_version_id_is_unknown_release(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/os-release": "ID=ubuntu\nID_LIKE=debian\nHOME_URL=\"http://www.ubuntu.com/\"",
        })

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)

    def test_missing_version_id_stops_fallback(self, stub_source) -> None:
        """A known ID without a release never consults later sources."""
        source = stub_source(
            commands={LSB: "Distributor ID: Ubuntu\nRelease: 14.04\n"},
            files={"/etc/os-release": "ID=ubuntu\n"},
        )

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)

        assert source.calls == [("read", "/etc/os-release")]

    def test_unmapped_id_falls_through(self, stub_source) -> None:
        """An unrecognized ID lets later sources answer."""
        source = stub_source(
            commands={LSB: "Distributor ID:\tCentOS\nRelease:\t7.3.1611\n"},
            files={"/etc/os-release": "ID=plan9\nVERSION_ID=4\n"},
        )

        assert get_distribution_release(source) == ("centos", "7.3.1611")

    def test_unmapped_id_with_no_other_source(self, stub_source) -> None:
        source = stub_source(files={"/etc/os-release": "ID=plan9\nVERSION_ID=4\n"})

        with pytest.raises(UnknownDistributionError):
            get_distribution_release(source)

    def test_empty_file_falls_through(self, stub_source) -> None:
        source = stub_source(
            commands={LSB: "Distributor ID: Debian\nRelease: 9.1\n"},
            files={"/etc/os-release": ""},
        )

        assert get_distribution_release(source) == ("debian", "9.1")

    def test_preferred_over_lsb_release(self, stub_source) -> None:
        """os-release wins when both sources could answer."""
        source = stub_source(
            commands={LSB: "Distributor ID: RedHatEnterpriseServer\nRelease: 7.3\n"},
            files={"/etc/os-release": "ID=\"rhel\"\nVERSION_ID=\"7.4\"\n"},
        )

        assert get_distribution_release(source) == ("rhel", "7.4")
        assert LSB not in source.calls


class TestLsbRelease:
    """Tests for the lsb_release source."""

    def test_synonym_mapping(self, stub_source) -> None:
        source = stub_source(commands={
            LSB: "Description:    Red Hat \n Distributor ID: RedHatEnterpriseServer\nRelease:    7.3",
        })

        assert get_distribution_release(source) == ("rhel", "7.3")

    def test_missing_distributor_id(self, stub_source) -> None:
        source = stub_source(commands={
            LSB: "Description:    Red Hat \n Missing ID: RedHatEnterpriseServer\nRelease:    7.3",
        })

        with pytest.raises(UnknownDistributionError):
            get_distribution_release(source)

    def test_missing_release(self, stub_source) -> None:
        source = stub_source(commands={
            LSB: "Description:    Red Hat \n Distributor ID: RedHatEnterpriseServer\nMissing:    7.3",
        })

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)

    def test_missing_release_stops_fallback(self, stub_source) -> None:
        source = stub_source(
            commands={LSB: "Distributor ID: Debian\n"},
            files={"/etc/issue": "Debian GNU/Linux 8 \\n \\l\n"},
        )

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)

        assert ("read", "/etc/issue") not in source.calls

    def test_not_available_release_stops_fallback(self, stub_source) -> None:
        source = stub_source(
            commands={LSB: "Distributor ID:\tDebian\nRelease:\tn/a\n"},
            files={"/etc/issue": "Debian GNU/Linux 8 \\n \\l\n"},
        )

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)

        assert ("read", "/etc/issue") not in source.calls

    def test_unmapped_distributor_falls_through(self, stub_source) -> None:
        source = stub_source(
            commands={LSB: "Distributor ID: Gentoo\nRelease: 2.2\n"},
            files={"/etc/issue": "Debian GNU/Linux 8 \\n \\l\n"},
        )

        assert get_distribution_release(source) == ("debian", "8")

    @pytest.mark.parametrize(
        "distributor,expected",
        [
            ("Ubuntu", "ubuntu"),
            ("SUSE LINUX", "sles"),
            ("openSUSE project", "suse"),
            ("AmazonAMI", "amzn"),
            ("CentOS", "centos"),
        ],
    )
    def test_distributor_synonyms(self, stub_source, distributor: str, expected: str) -> None:
        source = stub_source(commands={LSB: f"Distributor ID:\t{distributor}\nRelease:\t1.0\n"})

        assert get_distribution_release(source) == (expected, "1.0")


class TestDebianIssue:
    """Tests for the /etc/issue source."""

    def test_debian(self, stub_source) -> None:
        source = stub_source(files={"/etc/issue": "Debian GNU/Linux 8 \n \\l"})

        assert get_distribution_release(source) == ("debian", "8")

    def test_codename_release(self, stub_source) -> None:
        source = stub_source(files={"/etc/issue": "Debian GNU/Linux bookworm/sid \\n \\l\n"})

        assert get_distribution_release(source) == ("debian", "bookworm/sid")

    def test_debian_without_release(self, stub_source) -> None:
        source = stub_source(files={"/etc/issue": "Debian GNU/Linux \\n \\l\n"})

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)

    def test_other_issue_falls_through(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/issue": "Ubuntu 14.04.5 LTS \\n \\l\n",
            "/etc/centos-release": "CentOS release 6.9 (Final)\n",
        })

        assert get_distribution_release(source) == ("centos", "6.9")


class TestRedHatFamilyFiles:
    """Tests for /etc/centos-release, /etc/redhat-release and /etc/system-release."""

    def test_centos_release(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/centos-release": "CentOS Linux release 7.3.1611 (Core)\n",
            "/etc/redhat-release": "CentOS Linux release 7.3.1611 (Core)\n",
        })

        assert get_distribution_release(source) == ("centos", "7.3.1611")
        assert ("read", "/etc/redhat-release") not in source.calls

    def test_redhat_release(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/redhat-release": "Red Hat Enterprise Linux Server release 7.3 (Maipo)\n",
        })

        assert get_distribution_release(source) == ("rhel", "7.3")

    def test_derivative_reports_rhel(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/redhat-release": "Scientific Linux release 6.8 (Carbon)\n",
        })

        assert get_distribution_release(source) == ("rhel", "6.8")

    def test_product_without_release_number(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/redhat-release": "Red Hat Enterprise Linux Server (Maipo)\n",
            "/etc/system-release": "Amazon Linux AMI release 2017.09\n",
        })

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)

    def test_unknown_product_falls_through(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/redhat-release": "unknown 8 \n \\l",
            "/etc/system-release": "Amazon Linux AMI release 2017.09\n",
        })

        assert get_distribution_release(source) == ("amzn", "2017.09")


class TestSuseRelease:
    """Tests for the /etc/SuSE-release source."""

    def test_patchlevel_zero_omitted(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/SuSE-release": "SUSE Linux Enterprise\nVERSION = 12\nPATCHLEVEL = 0\n# This file is d",
        })

        assert get_distribution_release(source) == ("sles", "12")

    def test_patchlevel_appended(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/SuSE-release": (
                "SUSE Linux Enterprise Server 12 (x86_64)\n"
                "VERSION = 12\n"
                "PATCHLEVEL = 1\n"
            ),
        })

        assert get_distribution_release(source) == ("sles", "12.1")

    def test_opensuse_without_patchlevel(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/SuSE-release": "openSUSE 13.2 (x86_64)\nVERSION = 13.2\nCODENAME = Harlequin\n",
        })

        assert get_distribution_release(source) == ("suse", "13.2")

    def test_missing_version(self, stub_source) -> None:
        source = stub_source(files={
            "/etc/SuSE-release": "SUSE Linux Enterprise Server 11\nPATCHLEVEL = 4\n",
        })

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)


class TestSystemReleaseCpe:
    """Tests for the /etc/system-release-cpe source."""

    @pytest.mark.parametrize(
        "cpe,expected",
        [
            ("cpe:/o:redhat:enterprise_linux:7.3:ga:server", ("rhel", "7.3")),
            ("cpe:/o:amazon:linux:2018.03:ga", ("amzn", "2018.03")),
            ("cpe:2.3:o:amazon:amazon_linux:2", ("amzn", "2")),
            ("cpe:/o:fedoraproject:fedora:27", ("fedora", "27")),
        ],
    )
    def test_known_products(self, stub_source, cpe: str, expected: tuple[str, str]) -> None:
        source = stub_source(files={"/etc/system-release-cpe": cpe + "\n"})

        assert from_system_release_cpe(source) == expected
        assert get_distribution_release(source) == expected

    def test_unknown_vendor(self, stub_source) -> None:
        source = stub_source(files={"/etc/system-release-cpe": "cpe:/o:acme:os:1\n"})

        with pytest.raises(UnknownDistributionError):
            get_distribution_release(source)

    def test_wildcard_version(self, stub_source) -> None:
        source = stub_source(files={"/etc/system-release-cpe": "cpe:/o:redhat:enterprise_linux:*\n"})

        with pytest.raises(UnknownReleaseError):
            get_distribution_release(source)

    def test_not_a_cpe(self, stub_source) -> None:
        source = stub_source(files={"/etc/system-release-cpe": "garbage\n"})

        assert from_system_release_cpe(source) is None


class TestFallbackOrder:
    """Tests for the overall strategy order."""

    def test_all_sources_exhausted(self, stub_source) -> None:
        """Every source unreadable or unrecognized ends in UnknownDistributionError."""
        source = stub_source(files={
            "/etc/issue": "unknown 8 \n \\l",
            "/etc/redhat-release": "unknown 8 \n \\l",
            "/etc/system-release": "unknown 8 \n \\l",
        })

        with pytest.raises(UnknownDistributionError):
            get_distribution_release(source)

        assert source.calls == [
            ("read", "/etc/os-release"),
            LSB,
            ("read", "/etc/issue"),
            ("read", "/etc/centos-release"),
            ("read", "/etc/redhat-release"),
            ("read", "/etc/SuSE-release"),
            ("read", "/etc/system-release"),
            ("read", "/etc/system-release-cpe"),
        ]

    def test_strategy_count(self) -> None:
        """os-release, lsb_release and six legacy files."""
        assert len(STRATEGIES) == 8

    def test_each_call_reprobes(self, stub_source) -> None:
        source = stub_source(files={"/etc/os-release": "ID=debian\nVERSION_ID=\"9\"\n"})

        get_distribution_release(source)
        get_distribution_release(source)

        assert source.calls.count(("read", "/etc/os-release")) == 2
