"""
Unit tests for configuration loading and validation.
"""

import pytest

from ai_review_action.config import AppConfig, GitHubConfig, ModelConfig, ReviewConfig


ENV_NAMES = [
    'INPUT_GITHUB_TOKEN', 'GITHUB_TOKEN', 'INPUT_ANTHROPIC_API_KEY', 'ANTHROPIC_API_KEY',
    'INPUT_CLAUDE_MODEL', 'CLAUDE_MODEL', 'INPUT_EXCLUDE', 'EXCLUDE',
    'INPUT_REVIEW_LANGUAGE', 'REVIEW_LANGUAGE', 'INPUT_LINT_ENABLED', 'LINT_ENABLED',
    'LINT_TIMEOUT', 'GITHUB_WORKSPACE', 'LOG_LEVEL',
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def valid_config(**overrides):
    sections = {
        'github': GitHubConfig(token='gh'),
        'model': ModelConfig(api_key='sk'),
    }
    sections.update(overrides)
    return AppConfig(**sections)


class TestAppConfig:
    """Unit tests for AppConfig."""

    def test_from_env_reads_action_inputs(self, clean_env):
        clean_env.setenv('INPUT_GITHUB_TOKEN', 'gh-token')
        clean_env.setenv('INPUT_ANTHROPIC_API_KEY', 'sk-key')
        clean_env.setenv('INPUT_CLAUDE_MODEL', 'claude-test')
        clean_env.setenv('INPUT_EXCLUDE', '*.md,docs/**')
        clean_env.setenv('INPUT_LINT_ENABLED', 'false')
        clean_env.setenv('LINT_TIMEOUT', '60')

        config = AppConfig.from_env()

        assert config.github.token == 'gh-token'
        assert config.model.api_key == 'sk-key'
        assert config.model.model_name == 'claude-test'
        assert config.review.exclude == '*.md,docs/**'
        assert config.lint.enabled is False
        assert config.lint.timeout_seconds == 60

    def test_from_env_falls_back_to_plain_variables(self, clean_env):
        clean_env.setenv('GITHUB_TOKEN', 'plain')
        clean_env.setenv('ANTHROPIC_API_KEY', 'sk')

        config = AppConfig.from_env()

        assert config.github.token == 'plain'
        assert config.model.model_name == 'claude-3-5-sonnet-latest'
        assert config.model.temperature == 0.2
        assert config.model.max_tokens == 700
        assert config.review.exclude == ''
        assert config.lint.enabled is True
        assert config.lint.timeout_seconds is None

    def test_from_yaml(self, tmp_path):
        config_file = tmp_path / 'config.yaml'
        config_file.write_text(
            "github:\n"
            "  token: gh\n"
            "model:\n"
            "  api_key: sk\n"
            "  model_name: claude-yaml\n"
            "review:\n"
            "  exclude: '*.lock'\n"
            "  language: spanish\n"
            "lint:\n"
            "  excluded_dirs: [build, venv]\n"
        )

        config = AppConfig.from_yaml(str(config_file))

        assert config.model.model_name == 'claude-yaml'
        assert config.review.language == 'spanish'
        assert config.lint.excluded_dirs == ('build', 'venv')
        config.validate()

    def test_from_yaml_single_excluded_dir(self, tmp_path):
        config_file = tmp_path / 'config.yaml'
        config_file.write_text("lint:\n  excluded_dirs: build\n")

        config = AppConfig.from_yaml(str(config_file))

        assert config.lint.excluded_dirs == ('build',)

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(str(tmp_path / 'missing.yaml'))

    def test_validate_accepts_minimal_config(self):
        valid_config().validate()

    def test_validate_collects_all_errors(self):
        config = AppConfig(review=ReviewConfig(language='klingon'))

        with pytest.raises(ValueError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert message.startswith('Configuration validation failed')
        assert 'GitHub token is required' in message
        assert 'Anthropic API key is required' in message
        assert 'Unsupported review language: klingon' in message

    @pytest.mark.parametrize("model", [
        ModelConfig(api_key='sk', temperature=1.5),
        ModelConfig(api_key='sk', max_tokens=0),
        ModelConfig(api_key='sk', model_name=''),
    ])
    def test_validate_model_settings(self, model):
        with pytest.raises(ValueError):
            valid_config(model=model).validate()

    def test_to_dict_omits_secrets(self):
        data = valid_config().to_dict()

        assert 'token' not in data['github']
        assert 'api_key' not in data['model']
        assert data['model']['max_tokens'] == 700
        assert data['lint']['excluded_dirs'] == ['venv', 'env', '.venv', 'node_modules']
