from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Tuple

CRLF = b"\r\n"

def split(data: bytes, separator: bytes = CRLF) -> List[bytes]:
  # An empty buffer yields no lines at all rather than one empty line
  if not data:
      return []
  return data.split(separator)

def merge_mappings(first: Optional[Mapping[str, str]], last: Optional[Mapping[str, str]]) -> Dict[str, str]:
  """Concatenate two mappings; entries from last go in after first and win on collision."""
  merged = dict(first or {})
  merged.update(last or {})
  return merged

def iter_query_pairs(query_params: Any) -> Iterator[Tuple[str, Any]]:
  # Accept either a mapping or a sequence of (key, value) pairs
  if not query_params:
      return iter(())
  if isinstance(query_params, Mapping):
      return iter(query_params.items())

  pairs = list(query_params)
  for i, pair in enumerate(pairs):
      if not isinstance(pair, (tuple, list)) or len(pair) != 2:
          raise ValueError(f"Query parameter at index {i} must be a (key, value) pair")
  return iter(pairs)
