from pathlib import Path

import vedro

from compose_keeper import ComposeFileProcessor
from compose_keeper import read_compose_file
from config import Config
from contexts.compose_file import compose_file
from contexts.compose_file import project_directory
from contexts.compose_file import project_file
from contexts.compose_file import working_directory_subdir


class Scenario(vedro.Scenario):
    def given_files_both_in_working_and_compose_directories(self):
        self.cwd_directory = working_directory_subdir()
        self.relative_directory = self.cwd_directory.relative_to(Path.cwd())
        self.cwd_env = project_file(self.cwd_directory, 'app.env', 'FROM=cwd\n')
        self.cwd_config = project_file(self.cwd_directory, 'app.conf', 'from cwd\n')

        self.directory = project_directory()
        project_file(self.directory / self.relative_directory, 'app.env', 'FROM=compose\n')
        project_file(self.directory / self.relative_directory, 'app.conf', 'from compose\n')

    def given_compose_file(self):
        self.compose_file = compose_file(f"""
services:
  app:
    image: app:1.0
    env_file: ./{self.relative_directory}/app.env
    volumes:
      - ./{self.relative_directory}/app.conf:/etc/app.conf
""", directory=self.directory)
        self.document = read_compose_file(self.compose_file)

    def given_processor(self):
        self.processor = ComposeFileProcessor(Config.SERVICE_NAME, Config.SERVICE_VERSION, self.compose_file)

    def when_user_processes_compose_file(self):
        self.processor.process_custom_tags(self.document, [])

    def then_it_should_take_env_file_from_working_directory(self):
        assert self.document.services().to_native()['app']['env_file'] == str(self.cwd_env.resolve())

    def and_it_should_take_volume_from_working_directory(self):
        volumes = self.document.services().to_native()['app']['volumes']
        assert volumes == [f'{self.cwd_config.resolve()}:/etc/app.conf']
