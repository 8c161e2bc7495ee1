from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

from arb_bridge import _version


def test_version_reads_installed_distribution():
    with patch("arb_bridge._version.version", return_value="0.1.0") as mock_version:
        assert _version._get_version() == "0.1.0"
    mock_version.assert_called_once_with("arb-bridge-tutorials")


def test_version_without_installed_distribution():
    with patch("arb_bridge._version.version", side_effect=PackageNotFoundError("arb-bridge-tutorials")):
        assert _version._get_version() == "0.0.0"
