import os
import shlex
import subprocess
from ..cli_logger import logger

# Exit status reported for a program that could not be spawned, as a POSIX shell does.
COMMAND_NOT_FOUND = 127


class CommandRunner:
    """Capability used by the build pipeline to run one external program.

    Implementations block until the program exits and return its exit status.
    Tests substitute a recording runner so no real toolchain is needed.
    """

    def run(self, program, args, cwd, extra_env=None):
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    """Runs programs for real. stdin is closed, stdout/stderr pass through."""

    def run(self, program, args, cwd, extra_env=None):
        env = None
        if extra_env:
            env = os.environ.copy()
            env.update({key: str(value) for key, value in extra_env.items()})
        try:
            result = subprocess.run(
                [program, *args],
                cwd=cwd,
                env=env,
                stdin=subprocess.DEVNULL,
                check=False,
            )
        except FileNotFoundError as e:
            # raised for a missing cwd as well as a missing executable
            if cwd is not None and not os.path.isdir(cwd):
                logger.error(f"Working directory does not exist: {cwd}")
            else:
                logger.error(f"Command not found: {program}")
            return COMMAND_NOT_FOUND
        return result.returncode


def format_command(program, args):
    return shlex.join([program, *args])


def run_shell_command(command, env=None, input_data=None, cwd=None):
    """
    Executes a command and captures its output.

    Args:
        command (list): The command to execute as a list of strings.
        env (dict, optional): A dictionary of environment variables.
        input_data (str, optional): Data to be passed to the command's stdin.
        cwd (str, optional): The working directory for the command.

    Returns:
        A tuple (stdout, stderr, return_code). A command that cannot be
        started yields ("", <reason>, -1).
    """
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            env=env,
            input=input_data,
            check=False,
            cwd=cwd
        )
        return result.stdout, result.stderr, result.returncode
    except FileNotFoundError as e:
        logger.error(f"Command not found: {e.filename}")
        return "", str(e), -1
    except OSError as e:
        logger.error(f"Could not run {command[0]}: {e}")
        return "", str(e), -1
