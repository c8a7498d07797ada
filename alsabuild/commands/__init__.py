from .build import build
from .probe import probe
from .translate import translate
from .doctor import doctor
from .clean import clean
from .config import config
from .log import log
from .version import version

__all__ = ["build", "probe", "translate", "doctor", "clean", "config", "log", "version"]
