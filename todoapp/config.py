"""
Operational Configuration
-------------------------

TODOAPP configures itself at the library level.  When it is first loaded, the
library will create a config file for itself if it does not find one at its
default config path, or at the value of the environment variable
`TODOAPP_CONFIG` if it is set.  When it does, default settings for all
sections will be produced.

The default path is `<venv>/etc/todoapp.ini` when a virtual environment is
active, and `/etc/todoapp/todoapp.ini` otherwise.

There are two sections:

  * `[TodoApp]` holds the listener, CORS, storage and logging settings

  * `[Database]` holds the connection settings for the relational store

.. note::

    If the environment variable `DATABASE_URL` is set (it may also come from
    a `.env` file), it takes precedence over the individual connection
    settings of the `[Database]` section.

"""
import configparser
from pathlib import Path
from os import environ as env
from typing import Union
import logging

from dotenv import load_dotenv

from todoapp.util import AttrDict, ConnectionSettings, VenvDetector
from todoapp._version import __version__

load_dotenv()

logger = logging.getLogger(__name__)


class TodoAppConfig:
    """The configuation object

    Mostly a wrapper around :py:mod:`configparser`, with each section
    wrapped in :py:class:`todoapp.util.AttrDict`

    """

    @staticmethod
    def what_config_file(
        default_pathname: str = "/etc/todoapp/todoapp.ini",
    ) -> Path:
        """Determine what config file to read.

        Encapsulates search for a possible file pointed to by the
        environment setting `TODOAPP_CONFIG`

        """
        config_file = Path(env.get("TODOAPP_CONFIG", default_pathname))
        logger.debug("Configurator choosing file " + str(config_file))
        return config_file

    @staticmethod
    def setup_config(
        cp: configparser.ConfigParser,
    ) -> configparser.ConfigParser:
        """Setup default config pattern on the parser passed in

        :param configparser.ConfigParser cp: a
           :py:class:`configparser.ConfigParser` instance to hold the
           default config

        This routine establishes the default configuration.  It returns
        the same object which was passed to it.
        """
        cp["TodoApp"] = {
            "listen_address": "0.0.0.0",
            "listen_port": 3000,
            "cors_origin": "http://localhost:3001",
            "storage": "sqla",
            "log_level": "INFO",
            "syslog": False,
        }
        cp["Database"] = {
            "adapter": "postgresql",
            "db_host": "localhost",
            "db_port": 5432,
            "db_name": "todos",
            "db_user": "todos",
            "db_pass": "todos",
            "url": "",
        }
        return cp

    @staticmethod
    def write_config(cp, fn) -> Path:
        """Write the ConfigParser contents to disk.

        :param configparser.ConfigParser cp: a ConfigParser object
        :param Union[str, pathlib.Path] fn: path of the config file to write

        If the location's parent directory does not exist, an attempt is made
        to create it.  Raises :exc:`OSError` if that is not possible.

        Returns a :class:`pathlib.Path` which points at the newly-written file.

        """
        config_file = Path(fn)
        if not config_file.parent.exists():
            try:  # attempt to make any missing parent directories
                config_file.parent.mkdir(0o777, True)
            except OSError as e:
                logger.error(
                    "The specified config file's directory did not exist and"
                    f" could not be created.  File: {str(config_file)}"
                )
                raise e
        with config_file.open("w") as fh:
            cp.write(fh)
        return config_file

    def __init__(self):
        """Setup a new TodoAppConfig instance

        It causes a config file full of defaults to be written to disk if it
        does not find a file to read.  If it does find a file, it uses the
        settings from that file to overlay the defaults already set up on the
        config object, so settings missing from the file keep their defaults.

        Besides the on-disk settings, the `[TodoApp]` block carries the path
        of the file that was used and the version string.

        """
        self.venvdetector = VenvDetector()
        config_file = TodoAppConfig.what_config_file(
            self.venvdetector.confpath
        )
        self.configparser = configparser.ConfigParser(interpolation=None)
        TodoAppConfig.setup_config(self.configparser)

        if not config_file.exists():
            logger.debug("Writing new config file " + str(config_file))
            try:
                TodoAppConfig.write_config(self.configparser, config_file)
            except OSError:
                logger.warning(
                    f"Unable to write {config_file}; using default settings."
                )
        else:
            logger.debug("Reading from config file " + str(config_file))
            self.configparser.read(str(config_file))
        if env.get("DATABASE_URL"):
            self.configparser["Database"]["url"] = env["DATABASE_URL"]
        self.configparser["TodoApp"]["config_file"] = str(config_file)
        self.configparser["TodoApp"]["version"] = f"TODOAPP v{__version__}"
        self.todoapp = AttrDict(self.configparser["TodoApp"])
        self.database = ConnectionSettings(self.configparser["Database"])
        logger.debug("Returning config built from " + str(config_file))

    def get_block(self, blockname) -> AttrDict:
        """Attempt to get a top-level block of the config as an AttrDict.

        :param str blockname: the name of the block

        Return `None` if it cannot be found.

        """
        if self.configparser.has_section(blockname):
            if blockname == "Database":
                return ConnectionSettings(self.configparser[blockname])
            return AttrDict(self.configparser[blockname])
        return None

    def write(self, location: Union[str, Path] = None) -> Path:
        """Write the current config to disk.

        :param Union[str,pathlib.Path] location: where to write the file;
          defaults to the file the config was read from

        The elements of `[TodoApp]` which are not read from the file (the
        config file's own path and the version) are removed while the file is
        written, then restored.  The `url` is not written when it came from
        the environment.

        """
        location = Path(location or self.todoapp.config_file)
        config_file = self.configparser["TodoApp"]["config_file"]
        version = self.configparser["TodoApp"]["version"]
        url = self.configparser["Database"]["url"]
        self.configparser.remove_option("TodoApp", "config_file")
        self.configparser.remove_option("TodoApp", "version")
        if env.get("DATABASE_URL") == url:
            self.configparser["Database"]["url"] = ""
        try:
            result = TodoAppConfig.write_config(self.configparser, location)
        finally:
            self.configparser["TodoApp"]["config_file"] = config_file
            self.configparser["TodoApp"]["version"] = version
            self.configparser["Database"]["url"] = url
        return result


config = TodoAppConfig()
