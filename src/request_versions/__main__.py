"""Allow ``python -m request_versions``."""

from request_versions.cli.main import main

if __name__ == "__main__":
    main()
