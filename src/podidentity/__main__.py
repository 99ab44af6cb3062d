"""Allow `python -m podidentity`."""

import sys

from podidentity.cli import main

if __name__ == "__main__":
    sys.exit(main())
