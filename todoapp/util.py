"""
Utility classes
---------------

There is a utility class for providing the configuration data via an object
which presents dictionary keys as attributes.

In order to choose a sensible default location for the config file, an
object is provided which detects whether the library is running within a
virtual environment.

"""
import re
import sys
from pathlib import Path
from typing import Any, Dict, Optional


class VenvDetector:
    """Detect use of a virtual environment and calculate local paths

    Instance attributes:

      :ve: :obj:`bool` indicating whether a virtual environment is active

      :confpath: :class:`~pathlib.Path` pointing at the default config file

      :venvpath: :class:`~pathlib.Path` to the root of the active virtual
        environment, or None if none is active

    """

    # find the base prefix; hopefully pyenv-compatible
    def get_base_prefix_compat(self) -> str:
        """Return the non-virtual base prefix

        Sometimes called `sys.real_prefix`, so we check for both.

        """
        return (
            getattr(sys, "base_prefix", None)
            or getattr(sys, "real_prefix", None)
            or sys.prefix
        )

    def in_virtualenv(self) -> bool:
        """Compare prefixes to determine if a virtual environment is active."""
        return self.get_base_prefix_compat() != sys.prefix

    @property
    def ve(self) -> bool:
        """Property which memoizes :meth:`~.in_virtualenv`"""
        if "_ve" not in vars(self):
            self._ve = self.in_virtualenv()
        return self._ve

    @property
    def confpath(self) -> Path:
        """Memoizes the config file's full path

        Inside a virtual environment, the config file lives at
        `<venv>/etc/todoapp.ini`; otherwise at `/etc/todoapp/todoapp.ini`.

        """
        if "_confpath" not in vars(self):
            try:
                self._confpath = self.venvpath / "etc" / "todoapp.ini"
            except TypeError:
                self._confpath = Path("/") / "etc" / "todoapp" / "todoapp.ini"
        return self._confpath

    @property
    def venvpath(self) -> Optional[Path]:
        """The virtual environment root, if any

        :returns: None or the value of :const:`sys.prefix` as a :class:`Path`

        """
        if self.ve:
            return Path(sys.prefix)


class AttrDict:
    """Attribute Dictionary

    This simple class allows accessing the keys of a hash as attributes on an
    object.  As a useful side effect it also casts floats, integers and
    booleans in advance.

    This object is used in :class:`~todoapp.config.TodoAppConfig` for holding
    the configuration data, one instance per config block.

    .. admonition:: Subclassing

      All *internal instance attributes*, i.e. ones not associated to a
      key-value pair in the source object, should begin with `_` (an
      underscore).

    """

    boolean_pattern = re.compile("^([Tt]rue|[Ff]alse)$")
    """A regex to detect text-string boolean values"""

    uncast_keys = frozenset()
    """Keys whose values are kept exactly as provided"""

    def __init__(
        self, data: Dict[str, Any] = None, **kwargs: Optional[Dict[str, Any]]
    ):
        """Populate an instance with attributes

        :param data: a :obj:`dict` mapping attribute names onto values

        :param kwargs: used in place of `data` if, and only if, `data` is not
          provided

        Each value is cast to an :obj:`int` if possible, else to a
        :obj:`float`, else to a :obj:`bool` if it is a string spelling
        "true" or "false".  Anything else keeps its original value, which
        for a config block means a `str`.  Keys listed in
        :attr:`uncast_keys` are never cast.

        """
        if not data:
            data = kwargs
        for k, v in data.items():
            if k[0:2] != "__":
                val = v
                if k in self.uncast_keys:
                    setattr(self, k, val)
                    continue
                try:
                    val = int(v)
                except ValueError:
                    try:
                        val = float(v)
                    except ValueError:
                        m = self.boolean_pattern.match(v)
                        if m:
                            # a match four characters long spells True
                            val = m.span(0)[1] == 4
                except TypeError:
                    pass
                setattr(self, k, val)


class ConnectionSettings(AttrDict):
    """The `[Database]` block of the config

    Names and credentials are used verbatim, so a password such as `0123`
    or `false` reaches the database unchanged.

    """

    uncast_keys = frozenset(["db_host", "db_name", "db_user", "db_pass"])
