"""Ethiopia earthquake monitor.

Polls the USGS event feed, keeps the events located in Ethiopia, announces
new ones and exports filtered selections as CSV or KMZ.
"""

__version__ = "1.0.0"
