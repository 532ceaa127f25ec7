# src/artifact_graph/core/config/errors.py
"""
Exceções da camada de configuração do Artifact Graph.

Todas herdam de `ConfigError`, o que permite capturar de forma genérica
falhas de carregamento, merge e leitura de settings, separadas dos erros
de construção e execução do grafo.
"""


class ConfigError(Exception):
    """Base para erros de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de configuração base (defaults) não existe.

    O defaults é obrigatório; não há configuração implícita.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos aceitos: YAML (.yaml, .yml) e JSON (.json).
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapeamento."""


class ConfigTypeConflictError(ConfigError):
    """
    Uma mesma chave tem tipos incompatíveis entre base e override.

    Exemplo:
        - base:     {"engine": {"verbose": false}}
        - override: {"engine": "DEBUG"}
    """


class InvalidEngineSettingError(ConfigError):
    """Um valor da seção `engine` tem tipo inválido."""
