"""Entry point for `python -m stack_browser`."""

import sys

from stack_browser.app import main

if __name__ == "__main__":
    sys.exit(main())
