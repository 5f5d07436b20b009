import sys

from .topsis import main

if __name__ == "__main__":
    sys.exit(main())
