import sys

from referral_stats.cli import main

sys.exit(main())
