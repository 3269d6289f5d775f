"""Allow ``python -m mirror_bridge``."""

import sys

from mirror_bridge.main import main


if __name__ == "__main__":
    sys.exit(main())
