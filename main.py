# main.py
# Run: python main.py path/to/key.pem [--jwk]

import sys

from pkikeys.cli import main

if __name__ == "__main__":
    sys.exit(main())
