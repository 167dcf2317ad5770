"""Value objects for the project domain."""

import re

from pulse.domain.shared.model.value import IntId

KEY_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]{0,63}$")

RESERVED_FIELDS = frozenset({"id", "data_source_id", "value", "year", "month", "day"})
"""Fixed record fields; a dimension may not reuse one of these keys."""


class ProjectId(IntId):
    """Unique identifier for a Project."""


class DataSourceId(IntId):
    """Unique identifier for a DataSource."""
