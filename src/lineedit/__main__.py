"""Allow ``python -m lineedit``."""

from lineedit.cli import main

if __name__ == "__main__":
    main()
