"""
Lazybones - project scaffolding from remote templates

Lazybones resolves a named template against remote repositories, caches the
template archive locally, unpacks it into a new project directory and runs the
template's post-install step.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
