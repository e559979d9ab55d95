"""Main entry point for flowstache when run as a module."""

from flowstache.project_info import get_project_info


def main():
    """Print project name, version and description."""
    info = get_project_info()
    print(f"{info.name} v{info.version}: {info.description}")


if __name__ == "__main__":
    main()
