import io
from typing import Any, Dict, List

import pandas as pd

from ..core.errors import ParseFailure


def read_csv_records(content: bytes, name: str = "upload") -> List[Dict[str, Any]]:
    """Parse uploaded CSV bytes into typed records; blanks become None."""
    try:
        df = pd.read_csv(io.BytesIO(content), skip_blank_lines=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ParseFailure(name, str(e)) from e

    df.columns = [str(c) for c in df.columns]
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="records")
