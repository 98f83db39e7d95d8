import sys

from vapid_push.cli import main

if __name__ == "__main__":
    sys.exit(main())
