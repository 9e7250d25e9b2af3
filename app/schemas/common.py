#app/schemas/common.py
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from app.core.status import as_utc

# SQLite hands back naive datetimes; every stored timestamp is UTC
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
