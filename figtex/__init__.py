"""
figtex - PGFPlots figure generation and compilation

Builds publication-quality figures as an attributed document tree, renders
them to standalone LaTeX/PGFPlots source, and compiles that source to PDF.

Architecture:
- Templating Context: Document tree, attribute sets, LaTeX source generation
- Rendering Context: Engine selection, compilation workspace, output management
"""

__version__ = "0.1.0"
