import configparser
import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO, Tuple

import appdirs

from ..parser import is_valid

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('text', 'yaml')


def _check_base_uri(value: str) -> None:
    if not is_valid(value):
        raise ValueError(f"base.uri must be an absolute URI, got '{value}'")


def _check_bool(value: str) -> None:
    if value.lower() not in configparser.ConfigParser.BOOLEAN_STATES:
        raise ValueError(f"Expected a boolean (yes/no, true/false, on/off, 1/0), got '{value}'")


def _check_format(value: str) -> None:
    if value not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format '{value}', expected one of {', '.join(OUTPUT_FORMATS)}")


OPTIONS: Dict[str, Callable[[str], None]] = {
    'base.uri': _check_base_uri,
    'output.normalize': _check_bool,
    'output.format': _check_format,
}


def _parse_name(name: str) -> Tuple[str, str]:
    if name not in OPTIONS:
        raise KeyError(f"Unknown option {name}, expected one of {', '.join(OPTIONS)}")
    section, _, option = name.partition('.')
    return section, option


class Config:
    """
    urikit settings, read from the site and user urikit.cfg files and URIKIT_* environment variables.

    Options are named 'section.option' (base.uri is the 'uri' option of the [base] section) and checked when set.
    """
    CONFIG_FILE_NAME: str = 'urikit.cfg'
    ENV_PREFIX: str = 'URIKIT_'
    USER_CONFIG_PATH_VAR: str = 'URIKIT_USER_CONFIG_PATH'
    SITE_CONFIG_PATH_VAR: str = 'URIKIT_SITE_CONFIG_PATH'

    _parser: configparser.ConfigParser
    _overrides: Dict[str, str]
    _site_config_path: Path
    _user_config_path: Path

    def __init__(self, file_name=None) -> None:
        if file_name is None:
            file_name = Config.CONFIG_FILE_NAME
        # URIs carry percent escapes, which interpolation would choke on
        self._parser = configparser.ConfigParser(interpolation=None)
        self._overrides = {}
        self._site_config_path = Path(appdirs.site_config_dir('urikit')) / file_name
        self._user_config_path = Path(appdirs.user_config_dir('urikit')) / file_name

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path

    @property
    def site_config_path(self) -> Path:
        return self._site_config_path

    def _load_environmental_vars(self) -> None:
        for var, value in os.environ.items():
            if not var.startswith(Config.ENV_PREFIX):
                continue
            if var in (Config.USER_CONFIG_PATH_VAR, Config.SITE_CONFIG_PATH_VAR):
                continue
            name = var[len(Config.ENV_PREFIX):].replace('_', '.', 1).lower()
            if name not in OPTIONS:
                logger.warning("ignoring %s: no option %s", var, name)
                continue
            OPTIONS[name](value)
            self._overrides[name] = value

    def _load_user_config(self) -> None:
        if self._user_config_path.exists() and self._user_config_path.stat().st_mode & 0o777 != 0o600:
            raise PermissionError(f'User configuration file {self._user_config_path} has incorrect permissions, '
                                  f'expected 0600.')
        self._parser.read(self._user_config_path)

    def load(self, file: TextIO = None) -> None:
        """
        Load the configuration.

        Without a file the site config and then the user config are read, so user settings win. Their locations
        default to appdirs.site_config_dir('urikit') and appdirs.user_config_dir('urikit') and can be moved with the
        URIKIT_SITE_CONFIG_PATH and URIKIT_USER_CONFIG_PATH environmental variables.

        Options given as URIKIT_* environmental variables (URIKIT_BASE_URI for base.uri) take precedence over both
        and are never saved.

        :param file: A config file to read instead of the site and user files.
        :raises ValueError: If an environmental variable holds an invalid value.
        :raises PermissionError: If the user config file can be read by others.
        """
        if os.environ.get(Config.USER_CONFIG_PATH_VAR):
            self._user_config_path = Path(os.environ[Config.USER_CONFIG_PATH_VAR])
        if os.environ.get(Config.SITE_CONFIG_PATH_VAR):
            self._site_config_path = Path(os.environ[Config.SITE_CONFIG_PATH_VAR])

        if file is not None:
            self._parser.read_file(file)
        else:
            self._parser.read(self._site_config_path)
            self._load_user_config()

        self._load_environmental_vars()

    @property
    def base_uri(self) -> Optional[str]:
        """
        The base URI relative references are resolved against when none is given on the command line.
        """
        return self.get_option('base.uri', default=None) or None

    @property
    def normalize_output(self) -> bool:
        value = self.get_option('output.normalize', default='no')
        return configparser.ConfigParser.BOOLEAN_STATES.get(value.lower(), False)

    @property
    def output_format(self) -> str:
        return self.get_option('output.format', default='text')

    def save(self) -> None:
        self._user_config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._user_config_path, 'w') as file:
            self._parser.write(file)
        self._user_config_path.chmod(0o600)

    _MISSING = object()

    def get_option(self, name: str, default=_MISSING) -> Optional[str]:
        if name in self._overrides:
            return self._overrides[name]
        section, option = _parse_name(name)
        try:
            return self._parser.get(section, option)
        except (configparser.NoSectionError, configparser.NoOptionError):
            if default is not Config._MISSING:
                return default
            raise KeyError(f'Option {name} not set')

    def set_option(self, name: str, value: str) -> None:
        """
        Set an option in the configuration files' settings, to be written by save().

        :raises KeyError: If the option is unknown.
        :raises ValueError: If the value is not valid for the option.
        """
        section, option = _parse_name(name)
        OPTIONS[name](value)
        if not self._parser.has_section(section):
            self._parser.add_section(section)
        self._parser.set(section, option, value)

    def delete_option(self, name: str) -> None:
        section, option = _parse_name(name)
        if not self._parser.has_section(section) or not self._parser.remove_option(section, option):
            raise KeyError(f"Option {name} not set")
        if not self._parser.options(section):
            self._parser.remove_section(section)

    def list_options(self) -> List[str]:
        options = [f'{section}.{option}: {value}'
                   for section in self._parser.sections()
                   for option, value in self._parser.items(section)
                   if f'{section}.{option}' not in self._overrides]
        options += [f'{name}: {value} (from {Config.ENV_PREFIX}{name.replace(".", "_").upper()})'
                    for name, value in self._overrides.items()]
        return options
