import vedro

from compose_keeper import ComposeFileProcessor
from compose_keeper import ImageSource
from compose_keeper import read_compose_file
from config import Config
from contexts.compose_file import compose_file


class Scenario(vedro.Scenario):
    subject = 'classify image {image} of service {service} as {expected_source}'

    @vedro.params(Config.SERVICE_NAME, 'testservice:1.0.0', 'testservice:2.0.0', ImageSource.BUILD)
    @vedro.params('worker', 'worker:1.0<localbuild>', 'worker:1.0', ImageSource.BUILD)
    @vedro.params('worker', 'worker:1.0<LocalBuild>', 'worker:1.0', ImageSource.BUILD)
    @vedro.params('db', 'postgres:16<skippull>', 'postgres:16', ImageSource.CACHE)
    @vedro.params('db', 'postgres:16', 'postgres:16', ImageSource.DEFINED)
    def __init__(self, service, image, expected_image, expected_source):
        self.service = service
        self.image = image
        self.expected_image = expected_image
        self.expected_source = expected_source

    def given_compose_file(self):
        self.compose_file = compose_file(f"""
version: "3"

services:
  {self.service}:
    image: "{self.image}"
""")
        self.document = read_compose_file(self.compose_file)

    def given_processor(self):
        self.processor = ComposeFileProcessor(Config.SERVICE_NAME, Config.SERVICE_VERSION, self.compose_file)

    def when_user_processes_compose_file(self):
        self.services = self.processor.process_custom_tags(self.document, [])

    def then_it_should_classify_image_source(self):
        assert self.services[0].image_source == self.expected_source

    def and_it_should_resolve_image_name(self):
        assert self.services[0].image_name == self.expected_image

    def and_it_should_write_resolved_image_into_document(self):
        assert self.document.services().to_native()[self.service]['image'] == self.expected_image
