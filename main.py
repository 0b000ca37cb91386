"""snaprotate command-line launcher.

Source and target default to the directory holding this script.
"""

from snaprotate.cli import main

if __name__ == "__main__":
    main()
