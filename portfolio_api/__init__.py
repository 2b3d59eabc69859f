"""Portfolio website backend: blog, projects and single-admin auth."""

__version__ = "1.0.0"
