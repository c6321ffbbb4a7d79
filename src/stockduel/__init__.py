"""Two-security stock comparison: metrics, scorecard and grouped bar chart."""

__version__ = "0.1.0"
