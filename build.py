"""Build the site's listing pages and content indexes into ``dist``."""

from sitebuild.site import main


if __name__ == "__main__":
    raise SystemExit(main())
