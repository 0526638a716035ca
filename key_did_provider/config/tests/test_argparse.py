import os

import pytest

from unittest import TestCase, mock

from .. import argparse
from ..error import ArgsParseError

SEED = "testseed000000000000000000000001"


class TestArgParse(TestCase):
    def setUp(self):
        self.env = mock.patch.dict(os.environ)
        self.env.start()
        for name in ("KDP_SEED", "KDP_LOG_CONFIG", "KDP_LOG_FILE", "KDP_LOG_LEVEL"):
            os.environ.pop(name, None)

    def tearDown(self):
        self.env.stop()

    def test_registered_groups(self):
        groups = list(argparse.group.get_registered(argparse.CAT_PROVIDER))
        assert argparse.GeneralGroup in groups
        assert argparse.SeedGroup in groups
        assert argparse.LoggingGroup in groups
        assert argparse.SeedGroup.CATEGORIES == (argparse.CAT_PROVIDER,)

    def test_groups(self):
        """Test optional argument parsing."""
        parser = argparse.create_argument_parser()
        get_settings = argparse.load_argument_groups(
            parser, *argparse.group.get_registered(argparse.CAT_PROVIDER)
        )

        args = parser.parse_args(
            ["--seed", SEED, "--log-level", "debug", "--log-file", "out.log"]
        )
        assert get_settings(args) == {
            "provider.seed": SEED,
            "log.level": "debug",
            "log.file": "out.log",
        }

    def test_seed_required(self):
        parser = argparse.create_argument_parser()
        get_settings = argparse.load_argument_groups(parser, argparse.SeedGroup)
        args = parser.parse_args([])

        with mock.patch.object(parser, "print_help") as mock_print_help:
            with pytest.raises(ArgsParseError):
                get_settings(args)
            mock_print_help.assert_called_once()

    def test_env_vars(self):
        os.environ["KDP_SEED"] = SEED
        os.environ["KDP_LOG_CONFIG"] = "logging.yml"
        parser = argparse.create_argument_parser()
        get_settings = argparse.load_argument_groups(
            parser, argparse.SeedGroup, argparse.LoggingGroup
        )

        settings = get_settings(parser.parse_args([]))
        assert settings == {"provider.seed": SEED, "log.config": "logging.yml"}

    def test_logging_settings_empty(self):
        parser = argparse.create_argument_parser()
        group = argparse.LoggingGroup()
        group.add_arguments(parser)

        with mock.patch.object(parser, "exit") as exit_parser:
            parser.parse_args(["-h"])
            exit_parser.assert_called_once()

        assert group.get_settings(parser.parse_args([])) == {}
