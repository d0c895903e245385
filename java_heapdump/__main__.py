import sys

from java_heapdump.main import main

if __name__ == "__main__":
    sys.exit(main())
