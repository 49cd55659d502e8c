"""Allow ``python -m locale_keeper``."""

from locale_keeper.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
