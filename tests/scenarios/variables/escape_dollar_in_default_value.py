import vedro

from compose_keeper import process_variable_substitution


class Scenario(vedro.Scenario):
    def given_default_value_with_dollar(self):
        self.text = 'command: echo ${PASSWORD:-pa$word}'

    def when_user_substitutes_without_values(self):
        self.result = process_variable_substitution(self.text, [])

    def then_it_should_escape_dollar_for_docker_compose(self):
        assert self.result == 'command: echo pa$$word'
