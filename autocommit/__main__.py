import sys

from autocommit.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
