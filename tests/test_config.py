import json
import os
import pathlib
import tempfile
import unittest
from unittest import mock

from sitebuild import config as site_config


class LoadConfigTests(unittest.TestCase):
    def test_defaults_without_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch.dict(os.environ, {}, clear=True):
                config = site_config.load_config(pathlib.Path(tmpdir) / "config.json")

        self.assertEqual([c.name for c in config.collections], ["posts", "notes"])
        self.assertEqual(config.output_dir, site_config.OUTPUT_DIR)
        self.assertFalse(config.collection("posts").show_tags)

    def test_file_values_resolve_relative_to_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = pathlib.Path(tmpdir)
            path = root / "config.json"
            path.write_text(
                json.dumps(
                    {
                        "content_dir": "content",
                        "output_dir": "public",
                        "site_title": "My Site",
                        "collections": {"writing": {"dir": "src/writing", "route": "/blog/"}},
                    }
                ),
                encoding="utf-8",
            )
            with mock.patch.dict(os.environ, {}, clear=True):
                config = site_config.load_config(path)

            self.assertEqual(config.content_dir, root / "content")
            self.assertEqual(config.output_dir, root / "public")
            self.assertEqual(config.site_title, "My Site")
            writing = config.collection("writing")
            self.assertEqual(writing.route, "blog")
            self.assertEqual(writing.title, "Writing")
            self.assertEqual(config.collection_dir("writing"), root / "content" / "src" / "writing")

    def test_environment_overrides_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = pathlib.Path(tmpdir)
            path = root / "config.json"
            path.write_text(json.dumps({"content_dir": "content"}), encoding="utf-8")
            env = {"CONTENT_DIR": str(root / "elsewhere"), "SITE_TITLE": "From Env"}
            with mock.patch.dict(os.environ, env, clear=True):
                config = site_config.load_config(path)

            self.assertEqual(config.content_dir, root / "elsewhere")
            self.assertEqual(config.site_title, "From Env")

    def test_invalid_json_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ValueError):
                site_config.load_config(path)

            path.write_text("[]", encoding="utf-8")
            with self.assertRaises(ValueError):
                site_config.load_config(path)

    def test_non_object_collection_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = pathlib.Path(tmpdir)
            path = root / "config.json"
            path.write_text(json.dumps({"collections": {"posts": "posts"}}), encoding="utf-8")
            with mock.patch.dict(os.environ, {}, clear=True):
                with self.assertRaises(ValueError) as ctx:
                    site_config.load_config(path)
            self.assertIn("posts", str(ctx.exception))

            path.write_text(json.dumps({"collections": {"notes": None}}), encoding="utf-8")
            with mock.patch.dict(os.environ, {}, clear=True):
                config = site_config.load_config(path)
            self.assertEqual(config.collection("notes").route, "notes")

    def test_unknown_collection(self) -> None:
        with self.assertRaises(KeyError):
            site_config.SiteConfig().collection("gallery")


if __name__ == "__main__":
    unittest.main()
