import os
import pathlib
import tempfile
from unittest import TestCase
from unittest.mock import patch

from .. import config
from ..errors import ConfigurationError


CLOUDS_YAML = """\
clouds:
  first:
    auth_type: v3token
    auth:
      auth_url: https://keystone.example.com:5000/v3
      token: token-1
  second:
    auth_type: v3token
    auth:
      auth_url: https://keystone.example.com:5000/v3
      token: token-2
"""


class ConfigTestCase(TestCase):

    def setUp(self):
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.path = pathlib.Path(tmpdir.name) / "clouds.yaml"
        self.path.write_text(CLOUDS_YAML)
        patcher = patch.dict(os.environ, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop("OS_CLOUD", None)
        os.environ.pop("OS_CLIENT_CONFIG_FILE", None)

    def test_explicit_file_from_environment(self):
        os.environ["OS_CLIENT_CONFIG_FILE"] = str(self.path)
        self.assertEqual(config.find_clouds_file(), self.path)

    def test_load_clouds(self):
        data = config.load_clouds(self.path)
        self.assertEqual(list(data["clouds"]), ["first", "second"])

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            config.load_clouds(self.path.with_name("missing.yaml"))

    def test_invalid_yaml(self):
        self.path.write_text("clouds: [unterminated")
        with self.assertRaises(ConfigurationError):
            config.load_clouds(self.path)

    def test_no_clouds(self):
        self.path.write_text("other: value\n")
        with self.assertRaises(ConfigurationError):
            config.load_clouds(self.path)

    @patch("heatstacks.config.Connection.from_clouds")
    def test_connect_defaults_to_first_cloud(self, from_clouds):
        config.connect(path=self.path)
        self.assertIsNone(from_clouds.call_args[0][1])

    @patch("heatstacks.config.Connection.from_clouds")
    def test_connect_uses_os_cloud(self, from_clouds):
        os.environ["OS_CLOUD"] = "second"
        config.connect(path=self.path)
        self.assertEqual(from_clouds.call_args[0][1], "second")

    def test_connect_unknown_cloud(self):
        with self.assertRaises(ConfigurationError):
            config.connect("third", path=self.path)
