# layerscan

Building blocks for working with container image layers and for keeping a
vulnerability database up to date. It has no dependencies outside the
standard library.

## Installation

```
pip install layerscan
```

Tests need pytest, which comes with the `test` extra:

```
pip install "layerscan[test]"
```

## What is inside

- `layerscan.strutil`
  - `compare_string_lists(x, y)` returns the distinct items of `x` that are
    not in `y`, in the order of `x`.
  - `compare_string_lists_in_both(x, y)` returns the distinct items found in
    both lists, in the order of `x`.
- `layerscan.stopper`: `Stopper` lets a group of threads stop cleanly.
  - Workers call `begin()` when they start and `end()` when they finish.
  - `sleep(seconds)` returns `False` if a stop request cuts the sleep short.
  - `is_stopped()` reports whether a stop has been requested.
  - `stop()` signals the stop and waits until every worker has called
    `end()`. Calling it a second time raises `RuntimeError`.
- `layerscan.formatter`: `JSONExtendedFormatter(show_ln=False)` is a
  `logging.Formatter`. It writes each record as one JSON object. The object
  holds the record's `extra` fields (exceptions turned into their message)
  and `Time`, `Event` and `Level`, where `Level` is lower case, for example
  `"warning"`. With `show_ln=True` it also holds `Location`
  (`file.py:line`).
- `layerscan.tarutil`
  - `open_tar(fileobj)` detects gzip, bzip2 or xz compression by the first
    bytes of the stream and returns a streaming `tarfile.TarFile`.
  - `extract_files(fileobj, filenames, max_file_size=MAX_EXTRACTABLE_FILE_SIZE)`
    returns a dict of member path (with any leading `./` removed) to bytes,
    for every member whose path starts with one of the given prefixes.
    Symbolic and hard links map to empty bytes. It raises
    `ExtractedFileTooBigError` when a selected member is larger than
    `max_file_size`, and `CouldNotExtractError` when the data is not a
    readable archive. The default limit is 200 MiB.
- `layerscan.models`: dataclasses for `Namespace`, `Feature`,
  `NamespacedFeature`, `AffectedFeature`, `Vulnerability`,
  `VulnerabilityWithAffected`, `VulnerabilityID`,
  `VulnerabilityNotification`, `Processors`, `Layer`, `LayerWithContent` and
  `Ancestry`, and the `Severity` enum.
- `layerscan.vulnerabilities`
  - `namespace_vulnerabilities` splits vulnerabilities by the namespaces of
    their affected features and merges those that share a name and a
    namespace. It drops malformed entries and logs a warning for each.
  - `is_vulnerability_changed` compares severity and affected features.
  - `find_vulnerability_changes` returns `VulnerabilityChange` records and
    raises `ValueError` if the old vulnerabilities are not unique.
  - `update_vulnerabilities` stores new and changed vulnerabilities and
    returns the changes.
  - `create_vulnerability_notifications` stores one
    `VulnerabilityNotification` per change.

## The datastore

`update_vulnerabilities` and `create_vulnerability_notifications` take a
datastore that you supply. Its `begin()` must return a transaction with
these methods:

- `find_vulnerabilities(ids)`: one entry per `VulnerabilityID`, with `None`
  where nothing is stored.
- `delete_vulnerabilities(ids)`
- `insert_vulnerabilities(vulnerabilities)`
- `insert_vulnerability_notifications(notifications)`
- `commit()`
- `rollback()`: always called when the transaction ends, including after a
  successful `commit()`, so it must tolerate that.

## Example

```python
from layerscan.tarutil import extract_files

with open("layer.tar.gz", "rb") as fh:
    files = extract_files(fh, ["etc/os-release", "var/lib/dpkg/status"])

for path, content in files.items():
    print(path, len(content))
```

```python
import logging
from layerscan.formatter import JSONExtendedFormatter

handler = logging.StreamHandler()
handler.setFormatter(JSONExtendedFormatter(show_ln=True))
logging.getLogger().addHandler(handler)
logging.getLogger(__name__).warning("fetcher note", extra={"note": "stale feed"})
```

## What it does not do

- It does not detect namespaces or list the packages installed in a layer.
- It does not compute the features of an image's chain of layers.
- It does not fetch vulnerability feeds and has no periodic update loop.
- It has no storage of its own. The datastore is whatever object you pass
  in.
- It provides no command-line program and no server.

## Running the tests

```
pytest
```