import os
import sys

# lets test modules import the shared helpers module
sys.path.insert(0, os.path.dirname(__file__))
