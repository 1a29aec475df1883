import vedro

from compose_keeper.core.utils.compose_files import delete_compose_file
from contexts.keeper_service import instance_started
from contexts.keeper_service import keeper_service
from helpers.console import console_lines
from interfaces.compose_interface import FakeComposeInterface

COMPOSE = """
services:
  testservice:
    image: testservice:1.0.0
"""


class Scenario(vedro.Scenario):
    def given_started_instance(self):
        self.compose_interface = FakeComposeInterface()
        self.service = keeper_service(COMPOSE, compose_interface=self.compose_interface)
        self.old_instance = instance_started(self.service, ['-skipBuild'])

    def when_user_restarts_service(self):
        self.new_instance = self.service.restart(['-skipBuild'])
        vedro.defer(delete_compose_file, self.new_instance.compose_file_path)

    def then_it_should_stop_old_instance(self):
        assert self.compose_interface.calls_of('stop') == [
            (self.old_instance.instance_name, self.old_instance.compose_file_path)
        ]

    def and_it_should_start_new_instance(self):
        assert self.new_instance.instance_name != self.old_instance.instance_name
        assert self.service.instances_keeper.instances() == [self.new_instance]

    def and_it_should_print_new_instance(self):
        assert any(self.new_instance.instance_name in line for line in console_lines(self.service.console))
