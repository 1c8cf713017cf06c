"""Caller-visible failure kinds. Raised as JackutError; never leave state half-mutated."""

from enum import Enum


class ErrorKind(Enum):
    INVALID_IDENTIFIER = "Login inválido."
    INVALID_CREDENTIAL = "Senha inválida."
    DUPLICATE_ACCOUNT = "Conta com esse nome já existe."
    USER_NOT_FOUND = "Usuário não cadastrado."
    COMMUNITY_NOT_FOUND = "Comunidade não existe."
    DUPLICATE_COMMUNITY = "Comunidade com esse nome já existe."
    SELF_RELATIONSHIP = "Usuário não pode se relacionar consigo mesmo."
    ENEMY_BLOCKED = "Função inválida: usuário é seu inimigo."
    ALREADY_ADDED = "Usuário já está adicionado."
    ALREADY_FRIENDS = "Usuário já está adicionado como amigo."
    ALREADY_MEMBER = "Usuario já faz parte dessa comunidade."
    FRIEND_REQUEST_PENDING = "Usuário já está adicionado como amigo, esperando aceitação do convite."
    NOT_FRIENDS = "Usuário não está na sua lista de amigos."
    EMPTY_QUEUE = "Não há mensagens."
    INVALID_ATTRIBUTE = "Atributo inválido."
    ATTRIBUTE_NOT_SET = "Atributo não preenchido."
    BAD_CREDENTIALS = "Login ou senha inválidos."


class JackutError(Exception):
    """A rejected operation. `kind` tells callers why; the message is for display."""

    def __init__(self, kind: ErrorKind, message: str | None = None):
        self.kind = kind
        super().__init__(message or kind.value)
