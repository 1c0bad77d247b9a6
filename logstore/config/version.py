"""
Version information helper.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version():
    # Installed distribution metadata first, package attribute for source checkouts
    try:
        return version('logstore')
    except PackageNotFoundError:
        pass

    from logstore import __version__
    return __version__
