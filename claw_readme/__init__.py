"""
claw-readme - README generation from package.json and entry-point analysis.

Reads a Node.js project's manifest, probes its CLI for --help output,
scans its entry points for command and flag literals, and renders the
merged findings as a README.md draft or a JSON analysis.
"""

__version__ = "0.1.0"
