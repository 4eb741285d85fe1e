#!/usr/bin/env python3
"""
Simple wrapper script to run the mesh topology checker.

This lets users run the tool from the command line without installing the
package or worrying about Python module paths.
"""

import sys
from pathlib import Path

# Add the parent directory to the path so we can import mesh_topology
sys.path.insert(0, str(Path(__file__).parent))

from mesh_topology import main

if __name__ == "__main__":
    main()
