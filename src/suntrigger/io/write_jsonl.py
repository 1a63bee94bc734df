import json
from pathlib import Path
from typing import Iterable, Union


def write_day_rows(rows: Iterable[dict], path: Union[str, Path]) -> int:
  """Write sun-time rows as JSON lines; returns the number of rows."""
  p = Path(path)
  p.parent.mkdir(parents=True, exist_ok=True)
  n = 0
  with p.open("w", encoding="utf-8") as f:
    for row in rows:
      f.write(json.dumps(row, ensure_ascii=False) + "\n")
      n += 1
  return n
