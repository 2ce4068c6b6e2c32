import errno
import logging
import os
from typing import Iterable

import pandas as pd

from .constants import sort_columns

logger = logging.getLogger('svconsensus')


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


def cast(value, cast_func):
    """
    cast a value to a given type

    Example:
        >>> cast('1', int)
        1
    """
    if cast_func == bool:
        value = cast_boolean(value)
    else:
        value = cast_func(value)
    return value


def mkdirp(dirname):
    """
    Make a directory or path of directories. Suppresses the error that is normally raised when the directory already exists
    """
    logger.info(f'creating output directory: {dirname}')
    try:
        os.makedirs(dirname)
    except OSError as exc:
        if exc.errno == errno.EEXIST and os.path.isdir(dirname):
            pass
        else:
            raise exc
    return dirname


def output_tabbed_file(records: Iterable, filename: str, header=None):
    """
    write variant records (or pre-flattened rows) to a tab delimited file. Columns are the fixed
    record fields followed by the attribute keys
    """
    if header is None:
        custom_header = False
        header = set()
    else:
        custom_header = True
    rows = []
    for row in records:
        if not isinstance(row, dict):
            row = row.flatten()
        rows.append(row)
        if not custom_header:
            header.update(row.keys())  # type: ignore
    header = sort_columns(header)
    if os.path.dirname(filename):
        mkdirp(os.path.dirname(filename))
    logger.info(f'writing: {filename}')
    df = pd.DataFrame.from_records(rows, columns=header)
    df = df.fillna('None')
    df.to_csv(filename, columns=header, index=False, sep='\t')
