"""Allow ``python -m kubetop``."""

from kubetop.cli import main

if __name__ == "__main__":
    main()
