import sys

from pocketgotchi.main import main

sys.exit(main())
