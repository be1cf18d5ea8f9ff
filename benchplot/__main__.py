import sys

from benchplot.plot_results import main

sys.exit(main())
