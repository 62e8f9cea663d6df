"""dqcatalog: semantic type & data-quality rule catalog."""

__version__ = "0.4.0"
