"""Loaders of the datasets used by daymod.

Each dataset has its own folder, containing a 'raw_data' folder where
the raw data is placed and a 'parsed_data' folder where the
loaders store the parsed files.
"""
