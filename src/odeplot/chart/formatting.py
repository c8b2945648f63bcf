# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import math
from datetime import datetime, timedelta, timezone

from odeplot.chart.options import AxisFormat

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_TIME_FORMATS = {
    AxisFormat.TIME_HM: "%H:%M",
    AxisFormat.TIME_HMS: "%H:%M:%S",
    AxisFormat.DATE: "%Y-%m-%d",
    AxisFormat.DATETIME_HM: "%Y-%m-%d %H:%M",
    AxisFormat.DATETIME_HMS: "%Y-%m-%d %H:%M:%S",
}

_KGM = ((1e3, "K"), (1e6, "M"), (1e9, "G"))


def format_value(d, fmt=AxisFormat.NUMBER):
    """Format an axis tick value.

    Time and date formats read ``d`` as milliseconds since the epoch, in UTC.
    """
    if fmt in _TIME_FORMATS:
        if not math.isfinite(d):
            return _format_number(d, False)
        return (_EPOCH + timedelta(milliseconds=int(d))).strftime(_TIME_FORMATS[fmt])
    if fmt == AxisFormat.NUMBER_INT:
        if not math.isfinite(d):
            return _format_number(d, False)
        return str(int(d))
    return _format_number(d, fmt == AxisFormat.NUMBER_KGM)


def _format_number(d, use_kgm):
    if use_kgm and 1000 < d < 1e12:
        r = d
        for number, suffix in _KGM:
            r = d / number
            if r < 1000:
                break
        return f"{r:,.2f}{suffix}"
    # three significant digits, trailing zeros kept: 1.00, 0.500, 1.23E+03, 999
    s = format(d, "#.3G")
    if s.endswith("."):
        s = s[:-1]
    return s
