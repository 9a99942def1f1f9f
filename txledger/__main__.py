"""python -m txledger INPUT.csv"""

import sys

from txledger.cli import main

if __name__ == "__main__":
    sys.exit(main())
