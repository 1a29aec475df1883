import shlex
import subprocess
import sys
from pathlib import Path

from rich.text import Text
from rtry import retry

from compose_keeper.helpers.jobs_result import JobResult
from compose_keeper.helpers.jobs_result import OperationError
from compose_keeper.output.console import CONSOLE
from compose_keeper.output.styles import Style


class ComposeShellInterface:
    def __init__(self,
                 docker_compose_bin: str = 'docker-compose',
                 docker_bin: str = 'docker',
                 timeout: int | None = None,
                 console=CONSOLE):
        self.docker_compose_bin = docker_compose_bin
        self.docker_bin = docker_bin
        self.timeout = timeout
        self.console = console

    def _run(self, cmd: str, timeout: int | None = None) -> tuple[JobResult | OperationError, str]:
        sys.stdout.flush()
        self.console.print(Text(cmd, style=Style.context))
        try:
            process = subprocess.run(
                shlex.split(cmd),
                capture_output=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            return OperationError(f'Timed out after {e.timeout}s', command=cmd), ''
        except OSError as e:
            return OperationError(str(e), command=cmd), ''

        stdout = process.stdout.decode('utf-8')
        if process.returncode != 0:
            stderr = process.stderr.decode('utf-8')
            return OperationError(f'Stdout:\n{stdout}\n\nStderr:\n{stderr}', command=cmd), stdout
        return JobResult.GOOD, stdout

    def _compose(self, instance_id: str, compose_path: str | Path) -> str:
        return f'{self.docker_compose_bin} -p {shlex.quote(instance_id)} -f {shlex.quote(str(compose_path))}'

    @retry(attempts=3, delay=1, until=lambda x: x == JobResult.BAD)
    def docker_pull(self, image_name: str) -> JobResult | OperationError:
        result, _ = self._run(f'{self.docker_bin} pull {shlex.quote(image_name)}')
        return result

    def compose_up(self, instance_id: str, compose_path: str | Path) -> JobResult | OperationError:
        result, _ = self._run(f'{self._compose(instance_id, compose_path)} up -d', timeout=self.timeout)
        return result

    def compose_stop(self, instance_id: str, compose_path: str | Path) -> JobResult | OperationError:
        result, _ = self._run(f'{self._compose(instance_id, compose_path)} stop', timeout=self.timeout)
        return result

    def compose_rm(self, instance_id: str, compose_path: str | Path) -> JobResult | OperationError:
        result, _ = self._run(f'{self._compose(instance_id, compose_path)} rm -v -f')
        return result

    def compose_port(self, instance_id: str, compose_path: str | Path, service: str, container_port: str) -> str | None:
        port, _, protocol = container_port.partition('/')
        protocol_option = f'--protocol {shlex.quote(protocol)} ' if protocol else ''
        result, stdout = self._run(
            f'{self._compose(instance_id, compose_path)} port {protocol_option}{shlex.quote(service)} {shlex.quote(port)}'
        )
        if result != JobResult.GOOD or not stdout.strip():
            return None
        # `0.0.0.0:32768`
        return stdout.strip().splitlines()[0].rsplit(':', 1)[-1]

    def docker_network_rm(self, network_name: str) -> JobResult | OperationError:
        result, _ = self._run(f'{self.docker_bin} network rm {shlex.quote(network_name)}')
        return result

    def docker_volume_rm(self, volume_name: str) -> JobResult | OperationError:
        result, _ = self._run(f'{self.docker_bin} volume rm {shlex.quote(volume_name)}')
        return result
