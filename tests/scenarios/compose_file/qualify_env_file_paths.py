import vedro

from compose_keeper import ComposeFileProcessor
from compose_keeper import read_compose_file
from config import Config
from contexts.compose_file import compose_file
from contexts.compose_file import project_directory
from contexts.compose_file import project_file


class Scenario(vedro.Scenario):
    def given_project_with_env_files(self):
        self.directory = project_directory()
        self.common_env = project_file(self.directory, 'envs/common.env', 'A=1\n')
        self.app_env = project_file(self.directory, 'envs/app.env', 'B=2\n')

    def given_compose_file(self):
        self.compose_file = compose_file("""
services:
  web:
    image: nginx:1.25
    env_file: ./envs/common.env
  app:
    image: app:1.0
    env_file:
      - envs/common.env
      - ./envs/../envs/app.env
""", directory=self.directory)
        self.document = read_compose_file(self.compose_file)

    def given_processor(self):
        self.processor = ComposeFileProcessor(Config.SERVICE_NAME, Config.SERVICE_VERSION, self.compose_file)

    def when_user_processes_compose_file(self):
        self.processor.process_custom_tags(self.document, [])

    def then_it_should_qualify_single_env_file(self):
        services = self.document.services().to_native()
        assert services['web']['env_file'] == str(self.common_env.resolve())

    def and_it_should_qualify_env_file_list(self):
        services = self.document.services().to_native()
        assert services['app']['env_file'] == [str(self.common_env.resolve()), str(self.app_env.resolve())]
