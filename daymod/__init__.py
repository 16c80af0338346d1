"""Daymod, modelling of the days of activities of time use surveys.

The library converts the activity records of a time use survey into
blocks of activities, estimates the transitions between the blocks,
and samples or forecasts days from them.
"""
