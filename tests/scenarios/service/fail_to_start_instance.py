from pathlib import Path

import vedro

from compose_keeper.errors import ComposeUpError
from compose_keeper.helpers.jobs_result import OperationError
from contexts.keeper_service import keeper_service
from interfaces.compose_interface import FakeComposeInterface

COMPOSE = """
services:
  web:
    image: nginx:1.25
    ports:
      - "80"
"""


class Scenario(vedro.Scenario):
    def given_failing_compose_interface(self):
        self.compose_interface = FakeComposeInterface(
            up_result=OperationError('port is already allocated', command='docker-compose up -d')
        )

    def given_keeper_service(self):
        self.service = keeper_service(COMPOSE, compose_interface=self.compose_interface)

    def when_user_starts_instance(self):
        with vedro.catched(ComposeUpError) as self.exc_info:
            self.service.up([])

    def then_it_should_raise_up_error(self):
        assert self.exc_info.type is ComposeUpError
        assert 'port is already allocated' in str(self.exc_info.value)

    def and_it_should_delete_processed_compose_file(self):
        [(_, compose_path)] = self.compose_interface.calls_of('up')
        assert not Path(compose_path).exists()

    def and_it_should_not_record_instance(self):
        assert self.service.instances_keeper.instances() == []
        assert not self.service.instances_keeper.instances_file.exists()
