import vedro

from compose_keeper import process_variable_substitution


class Scenario(vedro.Scenario):
    subject = 'prefer explicit value over default in {text}'

    @vedro.params('image: app:${FOO:-bar}', 'image: app:baz')
    @vedro.params('image: app:${FOO}', 'image: app:baz')
    @vedro.params('a: ${FOO}\nb: ${FOO:-x}\nc: ${FOOBAR:-y}', 'a: baz\nb: baz\nc: y')
    def __init__(self, text, expected):
        self.text = text
        self.expected = expected

    def given_explicit_variables(self):
        self.variables = [('FOO', 'baz')]

    def when_user_substitutes_variables(self):
        self.result = process_variable_substitution(self.text, self.variables)

    def then_it_should_use_explicit_value(self):
        assert self.result == self.expected
