import sys

from pysimstats.walkthrough import main

sys.exit(main())
