"""
Allows running with: python -m onair
"""

import sys

from onair.main import main

if __name__ == "__main__":
    sys.exit(main())
