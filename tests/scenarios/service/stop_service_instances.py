from pathlib import Path

import vedro

from contexts.keeper_service import instance_started
from contexts.keeper_service import keeper_service
from interfaces.compose_interface import FakeComposeInterface

COMPOSE = """
version: "3"

services:
  testservice:
    image: testservice:1.0.0
    networks:
      - backend
      - shared
    volumes:
      - data:/data

networks:
  backend: {}
  shared:
    external: true

volumes:
  data: {}
"""


class Scenario(vedro.Scenario):
    def given_started_instances(self):
        self.compose_interface = FakeComposeInterface()
        self.service = keeper_service(COMPOSE, compose_interface=self.compose_interface)
        self.instances = [
            instance_started(self.service, ['-skipBuild']),
            instance_started(self.service, ['-skipBuild']),
        ]
        self.compose_interface.calls = []

    def when_user_stops_service_instances(self):
        self.stopped = self.service.stop([])

    def then_it_should_stop_every_instance_of_service(self):
        assert self.stopped == [instance.instance_name for instance in self.instances]
        assert self.compose_interface.calls_of('stop') == [
            (instance.instance_name, instance.compose_file_path) for instance in self.instances
        ]

    def and_it_should_remove_containers(self):
        assert self.compose_interface.calls_of('rm') == [
            (instance.instance_name, instance.compose_file_path) for instance in self.instances
        ]

    def and_it_should_remove_named_volumes(self):
        assert self.compose_interface.calls_of('volume_rm') == [
            (f'{instance.instance_name}_data',) for instance in self.instances
        ]

    def and_it_should_remove_internal_networks_only(self):
        assert self.compose_interface.calls_of('network_rm') == [
            (f'{instance.instance_name}_{network}',)
            for instance in self.instances
            for network in ('backend', 'default')
        ]

    def and_it_should_delete_processed_compose_files(self):
        assert not any(Path(instance.compose_file_path).exists() for instance in self.instances)

    def and_it_should_forget_instances(self):
        assert self.service.instances_keeper.instances() == []
        assert not self.service.instances_keeper.instances_file.exists()
