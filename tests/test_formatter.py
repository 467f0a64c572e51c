"""Tests for fmcontent.formatter (JSON and CSV)."""

import csv
import io
import json

from fmcontent.entry import Entry
from fmcontent.formatter.csv_ import CsvColumn, format_csv
from fmcontent.formatter.json_ import format_json
from fmcontent.lister import ContentListing

_DIR = Entry(path="docs", type="dir", meta={"timestamp": 1})
_FILE = Entry(
    path="docs/a.txt",
    type="file",
    filename="a",
    extension="txt",
    dirname="docs",
    acl=1,
    meta={"size": 12},
)


class TestFormatJson:
    def test_listing(self) -> None:
        data = json.loads(format_json(ContentListing([_DIR], [_FILE])))
        assert data["directories"] == [{"path": "docs", "type": "dir", "basename": "docs", "timestamp": 1}]
        assert data["files"][0]["size"] == 12

    def test_entry_list(self) -> None:
        data = json.loads(format_json([_DIR, _FILE]))
        assert [item["path"] for item in data] == ["docs", "docs/a.txt"]

    def test_single_entry(self) -> None:
        assert json.loads(format_json(_FILE))["acl"] == 1


class TestFormatCsv:
    def test_header_and_rows(self) -> None:
        rows = list(csv.reader(io.StringIO(format_csv([_DIR, _FILE]))))
        assert rows[0] == ["type", "path", "basename", "dirname", "extension", "size", "acl"]
        assert rows[1] == ["dir", "docs", "docs", "", "", "", ""]
        assert rows[2] == ["file", "docs/a.txt", "a.txt", "docs", "txt", "12", "1"]

    def test_empty(self) -> None:
        assert format_csv([]) == "type,path,basename,dirname,extension,size,acl"

    def test_custom_columns(self) -> None:
        columns = [CsvColumn(name="name", extract=lambda entry: entry.basename)]
        assert format_csv([_FILE], columns) == "name\na.txt"
