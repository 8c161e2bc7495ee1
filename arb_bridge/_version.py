from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "arb-bridge-tutorials"


def _get_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # Source checkout that was never installed
        return "0.0.0"


VERSION = _get_version()
