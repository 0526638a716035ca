"""Command line option parsing."""

import abc
from typing import Type

from configargparse import ArgumentParser, Namespace, YAMLConfigFileParser

from .error import ArgsParseError

CAT_PROVIDER = "provider"


class ArgumentGroup(abc.ABC):
    """A class representing a group of related command line arguments."""

    GROUP_NAME = None

    @abc.abstractmethod
    def add_arguments(self, parser: ArgumentParser):
        """Add arguments to the provided argument parser."""

    @abc.abstractmethod
    def get_settings(self, args: Namespace) -> dict:
        """Extract settings from the parsed arguments."""


class group:
    """Decorator for registering argument groups."""

    _registered = []

    def __init__(self, *categories):
        """Initialize the decorator."""
        self.categories = tuple(categories)

    def __call__(self, group_cls: ArgumentGroup):
        """Register a class in the given categories."""
        setattr(group_cls, "CATEGORIES", self.categories)
        self._registered.append((self.categories, group_cls))
        return group_cls

    @classmethod
    def get_registered(cls, category: str = None):
        """Fetch the set of registered classes in a category."""
        return (
            grp
            for (cats, grp) in cls._registered
            if category is None or category in cats
        )


def create_argument_parser(*, prog: str = None):
    """Create an instance of an arg parser, force yaml format for external config."""
    return ArgumentParser(config_file_parser_class=YAMLConfigFileParser, prog=prog)


def load_argument_groups(parser: ArgumentParser, *groups: Type[ArgumentGroup]):
    """
    Load a set of argument groups into a parser.

    Returns:
        A callable to convert loaded arguments into a settings dictionary

    """
    group_inst = []
    for group_cls in groups:
        g_parser = parser.add_argument_group(group_cls.GROUP_NAME)
        inst = group_cls()
        inst.add_arguments(g_parser)
        group_inst.append(inst)

    def get_settings(args: Namespace):
        settings = {}
        try:
            for inst in group_inst:
                settings.update(inst.get_settings(args))
        except ArgsParseError as e:
            parser.print_help()
            raise e
        return settings

    return get_settings


@group(CAT_PROVIDER)
class GeneralGroup(ArgumentGroup):
    """General settings."""

    GROUP_NAME = "General"

    def add_arguments(self, parser: ArgumentParser):
        """Add general command line arguments to the parser."""
        parser.add_argument(
            "--arg-file",
            dest="arg_file",
            is_config_file=True,
            help="Load argument values from the YAML file specified.",
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract general settings."""
        return {}


@group(CAT_PROVIDER)
class SeedGroup(ArgumentGroup):
    """Key material settings."""

    GROUP_NAME = "Seed"

    def add_arguments(self, parser: ArgumentParser):
        """Add seed command line arguments to the parser."""
        parser.add_argument(
            "--seed",
            dest="seed",
            type=str,
            metavar="<seed>",
            env_var="KDP_SEED",
            help=(
                "Specifies the 32 byte seed the Ed25519 key is derived from, as "
                "base64 (padded), 64 hex digits or 32 ASCII characters. Prefer "
                "the environment variable so the seed stays out of process lists."
            ),
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract seed settings."""
        if not args.seed:
            raise ArgsParseError("Parameter --seed (or KDP_SEED) is required")
        return {"provider.seed": args.seed}


@group(CAT_PROVIDER)
class LoggingGroup(ArgumentGroup):
    """Logging settings."""

    GROUP_NAME = "Logging"

    def add_arguments(self, parser: ArgumentParser):
        """Add logging-specific command line arguments to the parser."""
        parser.add_argument(
            "--log-config",
            dest="log_config",
            type=str,
            metavar="<path-to-config>",
            default=None,
            env_var="KDP_LOG_CONFIG",
            help="Specifies a custom logging configuration file",
        )
        parser.add_argument(
            "--log-file",
            dest="log_file",
            type=str,
            metavar="<log-file>",
            default=None,
            env_var="KDP_LOG_FILE",
            help="Also write JSON formatted log records to the named <log-file>.",
        )
        parser.add_argument(
            "--log-level",
            dest="log_level",
            type=str,
            metavar="<log-level>",
            default=None,
            env_var="KDP_LOG_LEVEL",
            help=(
                "Specifies a custom logging level as one of: "
                "('debug', 'info', 'warning', 'error', 'critical')"
            ),
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract logging settings."""
        settings = {}
        if args.log_config:
            settings["log.config"] = args.log_config
        if args.log_file:
            settings["log.file"] = args.log_file
        if args.log_level:
            settings["log.level"] = args.log_level
        return settings
