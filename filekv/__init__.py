"""
filekv: File-Backed Key-Value Store

A small TCP key-value server where every key is a file on disk.
Clients send one SET, GET or DEL command per connection and get
one text response back.
"""

__version__ = "1.0.0"
