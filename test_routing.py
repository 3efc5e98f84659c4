#!/usr/bin/env python3
"""Test the vercel.json routing descriptor reader."""

import json
import tempfile
import unittest
from pathlib import Path

from portfolio.routing import (
    RoutingDescriptorError,
    load_descriptor,
    parse_descriptor,
)


class TestProjectDescriptor(unittest.TestCase):
    """The shipped vercel.json sends every path to the one function."""

    def setUp(self):
        self.descriptor = load_descriptor()

    def test_version_and_build(self):
        self.assertEqual(self.descriptor.version, 2)
        self.assertEqual(len(self.descriptor.builds), 1)
        self.assertEqual(self.descriptor.builds[0].src, "api/index.py")
        self.assertEqual(self.descriptor.builds[0].use, "@vercel/python")

    def test_all_paths_resolve_to_entry_point(self):
        paths = ["/", "/api/v1/projects", "/api/v1/blogs/hello-world", "/anything/else", "/favicon.ico"]
        for path in paths:
            for method in ("GET", "POST", "OPTIONS"):
                self.assertEqual(self.descriptor.resolve(path, method), "api/index.py", (path, method))

    def test_entry_point_exists(self):
        root = Path(__file__).resolve().parent
        for build in self.descriptor.builds:
            self.assertTrue((root / build.src).exists())


class TestParseDescriptor(unittest.TestCase):

    def test_methods_restrict_matches(self):
        descriptor = parse_descriptor({
            "version": 2,
            "routes": [{"src": "/api/(.*)", "dest": "api/index.py", "methods": ["get"]}],
        })
        self.assertEqual(descriptor.resolve("/api/x", "GET"), "api/index.py")
        self.assertIsNone(descriptor.resolve("/api/x", "POST"))
        self.assertIsNone(descriptor.resolve("/other", "GET"))

    def test_first_matching_route_wins(self):
        descriptor = parse_descriptor({
            "version": 2,
            "routes": [
                {"src": "/static/(.*)", "dest": "public/$1"},
                {"src": "/(.*)", "dest": "api/index.py"},
            ],
        })
        self.assertEqual(descriptor.resolve("/static/a.css"), "public/$1")
        self.assertEqual(descriptor.resolve("/a.css"), "api/index.py")

    def test_rejects_unknown_options(self):
        with self.assertRaises(RoutingDescriptorError):
            parse_descriptor({"version": 2, "rewrites": []})

    def test_rejects_bad_version(self):
        with self.assertRaises(RoutingDescriptorError):
            parse_descriptor({"version": "2"})

    def test_rejects_route_without_dest(self):
        with self.assertRaises(RoutingDescriptorError):
            parse_descriptor({"version": 2, "routes": [{"src": "/(.*)"}]})

    def test_rejects_invalid_pattern(self):
        with self.assertRaises(RoutingDescriptorError):
            parse_descriptor({"version": 2, "routes": [{"src": "/(", "dest": "api/index.py"}]})

    def test_rejects_boolean_version(self):
        with self.assertRaises(RoutingDescriptorError):
            parse_descriptor({"version": True})

    def test_rejects_non_list_sections(self):
        for raw in (
            {"version": 2, "builds": "x"},
            {"version": 2, "routes": {}},
            {"version": 2, "routes": {"/(.*)": "api/index.py"}},
        ):
            with self.assertRaises(RoutingDescriptorError, msg=raw):
                parse_descriptor(raw)

    def test_rejects_non_object_entries(self):
        for raw in (
            {"version": 2, "routes": ["/(.*)"]},
            {"version": 2, "builds": [["api/index.py", "@vercel/python"]]},
        ):
            with self.assertRaises(RoutingDescriptorError, msg=raw):
                parse_descriptor(raw)

    def test_rejects_non_list_methods(self):
        with self.assertRaises(RoutingDescriptorError):
            parse_descriptor({"version": 2, "routes": [{"src": "/", "dest": "x", "methods": "GET"}]})


class TestLoadDescriptor(unittest.TestCase):

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def test_missing_file(self):
        with self.assertRaises(RoutingDescriptorError):
            load_descriptor(self.test_dir / "vercel.json")

    def test_invalid_json(self):
        path = self.test_dir / "vercel.json"
        path.write_text("{not json")
        with self.assertRaises(RoutingDescriptorError):
            load_descriptor(path)

    def test_round_trip_from_disk(self):
        path = self.test_dir / "vercel.json"
        path.write_text(json.dumps({
            "version": 2,
            "builds": [{"src": "api/index.py", "use": "@vercel/python"}],
            "routes": [{"src": "/(.*)", "dest": "api/index.py"}],
        }))
        self.assertEqual(load_descriptor(path).resolve("/x"), "api/index.py")


if __name__ == "__main__":
    unittest.main()
