import sys

from repoaudit.cli import main

if __name__ == "__main__":
    sys.exit(main())
