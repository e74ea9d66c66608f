"""Building blocks of a small relational database: pages, sorting, printing and a query front end."""

__version__ = "0.1.0"