"""Different formatted error messages that can be used in Daymod.

You can use these messages like this::

    raise ConfigurationError(INVALID_BLOCK_DURATION.format(
        block_duration=7
    ))


* INVALID_BLOCK_DURATION(block_duration)
* MALFORMED_TIMESTAMP(timestamp, reason)
* TRUNCATED_BLOCK_FILE(path, part, expected, actual)
* DROPPED_UNMAPPED_RECORDS(n_dropped, n_records, codes)
* BLOCKS_PER_DAY_MISMATCH(expected, actual, day)

"""


INVALID_BLOCK_DURATION = (
    "Block duration must be a positive number of minutes that divides "
    "evenly into a day (1440 minutes), got '{block_duration}'."
)

MALFORMED_TIMESTAMP = (
    "Invalid time '{timestamp}', expected 'HH:MM:SS': {reason}."
)

TRUNCATED_BLOCK_FILE = (
    "Block file '{path}' is truncated: the {part} requires {expected} "
    "bytes but only {actual} bytes were found."
)

DROPPED_UNMAPPED_RECORDS = (
    "Dropped {n_dropped} of {n_records} records with activity codes "
    "that have no category: {codes}."
)

BLOCKS_PER_DAY_MISMATCH = (
    "All days must have {expected} blocks, but day {day} has {actual}."
)
