"""DocTool Studio: file intake and tool routing for document workflows."""

__version__ = "0.1.0"
