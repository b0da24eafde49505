import sys

from notes_archiver.main import main

if __name__ == "__main__":
    sys.exit(main())
