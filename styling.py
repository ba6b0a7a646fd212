# styling.py v1.1
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v1.1: "Phase Wheel"
# - Console colors stay centralized here.
# - Adds the plot colors used by the defect analytics report.

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from termcolor import cprint

# --- Console Colors (using termcolor names) ---
# Usage: cprint("Hello", C.INFO)
class C:
    HEADER = 'magenta'
    SUBHEADER = 'cyan'
    SUCCESS = 'green'
    WARNING = 'yellow'
    ERROR = 'red'
    INFO = 'white'
    DEBUG = 'grey'
    BOLD_ATTR = ['bold']

# --- Matplotlib Plotting Styles ---
plt.style.use('dark_background')

FONT_SIZE_TITLE = 18
FONT_SIZE_LABEL = 12

# Analytics plots
COLOR_MAGNITUDE = '#00FFFF'    # Cyan
COLOR_VORTEX = '#FFD700'       # Gold, +1 defects
COLOR_ANTIVORTEX = '#FF4FA0'   # Pink, -1 defects

if __name__ == "__main__":
    cprint("--- styling.py loaded ---", C.SUCCESS)
    cprint("Example usage:", C.SUBHEADER, attrs=C.BOLD_ATTR)
    cprint("  from styling import C", C.DEBUG)
    cprint("  cprint('Hello!', C.HEADER, attrs=C.BOLD_ATTR)", C.DEBUG)
