import vedro

from compose_keeper.core.utils.ports import get_debug_port
from compose_keeper.core.yaml_document import from_native

DEBUG_OPTIONS = '-agentlib:jdwp=transport=dt_socket,server=y,suspend=n,address={address}'


class Scenario(vedro.Scenario):
    subject = 'detect debug port in {description}'

    @vedro.params('environment mapping', {'JAVA_TOOL_OPTIONS': DEBUG_OPTIONS.format(address='5005')}, '5005')
    @vedro.params('environment list', ['A=1', 'JAVA_TOOL_OPTIONS=' + DEBUG_OPTIONS.format(address='*:5006')], '5006')
    @vedro.params('environment without debug options', {'JAVA_OPTS': '-Xmx1g'}, None)
    @vedro.params('options without address', {'JAVA_TOOL_OPTIONS': '-Xmx1g'}, None)
    def __init__(self, description, environment, expected):
        self.environment = environment
        self.expected = expected

    def given_service(self):
        self.service = from_native({
            'image': 'app:1.0',
            'environment': self.environment,
            'ports': ['5005:5005'],
        })

    def when_user_detects_debug_port(self):
        self.result = get_debug_port(self.service)

    def then_it_should_return_debug_port(self):
        assert self.result == self.expected
