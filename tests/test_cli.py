"""Unit tests for the command line."""

import io
import json
import os
import tempfile
import unittest
from unittest.mock import AsyncMock, patch

from leto import cli
from leto.errors import FetchError
from leto.models import ExtractionMethod, ReadingState, ReadingStateSource


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name: str, content: str) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_import(self):
        path = self.write("saved.json", '{"Text": "saved words"}')

        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = cli.main(["import", path, "--source", "ClipboardPaste"])

        self.assertEqual(code, 0)
        exported = json.loads(out.getvalue())
        self.assertEqual(exported["Text"], "saved words")
        self.assertEqual(exported["Source"], int(ReadingStateSource.CLIPBOARD_PASTE))
        self.assertEqual(exported["SourceDescription"], "Imported from saved.json")

    def test_import_invalid_file(self):
        path = self.write("broken.json", "{not json")
        self.assertEqual(cli.main(["import", path]), 1)

    def test_import_missing_file(self):
        missing = os.path.join(self.tmp.name, "nope.json")
        self.assertEqual(cli.main(["import", missing]), 1)

    def test_import_unknown_source(self):
        path = self.write("saved.json", '{"Text": "x"}')
        self.assertEqual(cli.main(["import", path, "--source", "Nowhere"]), 1)

    def test_scrape_with_path(self):
        state = ReadingState.create(
            "Page", "body", ReadingStateSource.WEBSITE_EXTRACT, "Extracted from u"
        )
        scrape = AsyncMock(return_value=state)

        with patch.object(ReadingState, "scrape_from_web", scrape), patch(
            "sys.stdout", new_callable=io.StringIO
        ) as out:
            code = cli.main(["scrape", "https://example.com", "--path", "//p", "--select-all"])

        self.assertEqual(code, 0)
        request = scrape.call_args[0][0]
        self.assertEqual(request.method, ExtractionMethod.PATH_SELECT)
        self.assertEqual(request.path_select_options.path, "//p")
        self.assertTrue(request.path_select_options.select_all)
        self.assertEqual(json.loads(out.getvalue())["Title"], "Page")

    def test_scrape_failure(self):
        scrape = AsyncMock(side_effect=FetchError("offline"))
        with patch.object(ReadingState, "scrape_from_web", scrape):
            self.assertEqual(cli.main(["scrape", "https://example.com"]), 1)
        request = scrape.call_args[0][0]
        self.assertEqual(request.method, ExtractionMethod.LARGEST_ARTICLE_SUBSECTION)


if __name__ == "__main__":
    unittest.main()
