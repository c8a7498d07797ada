from .command_executor import CommandRunner, SubprocessRunner, run_shell_command
from .triple_translator import TRIPLE_TRANSLATIONS, translate, resolve_cross_target
