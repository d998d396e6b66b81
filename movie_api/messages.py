# ------------------------------------------------------------
# messages.py — 응답 메시지 현지화 카탈로그
# ------------------------------------------------------------

from . import config

DEFAULT_LOCALE = "pt-BR"

CATALOG = {
    "pt-BR": {
        "duplicate_title": "Já tem um filme com o mesmo nome cadastrado",
        "create_failed": "Falha ao cadastrar um filme",
        "movie_not_found": "Filme não encontrado",
        "update_failed": "Falha ao tentar atualizar o registro do filme",
        "movie_updated": "Filme atualizado",
        "delete_failed": "Não foi possível deletar o filme",
        "movie_deleted": "Filme deletado com sucesso",
        "list_failed": "Falha ao listar os filmes",
    },
    "ko": {
        "duplicate_title": "같은 제목의 영화가 이미 등록되어 있습니다.",
        "create_failed": "영화 등록에 실패했습니다.",
        "movie_not_found": "영화를 찾을 수 없습니다.",
        "update_failed": "영화 정보 수정에 실패했습니다.",
        "movie_updated": "영화 정보가 수정되었습니다.",
        "delete_failed": "영화를 삭제할 수 없습니다.",
        "movie_deleted": "영화가 삭제되었습니다.",
        "list_failed": "영화 목록 조회에 실패했습니다.",
    },
    "en": {
        "duplicate_title": "A movie with the same title is already registered",
        "create_failed": "Failed to register the movie",
        "movie_not_found": "Movie not found",
        "update_failed": "Failed to update the movie record",
        "movie_updated": "Movie updated",
        "delete_failed": "Could not delete the movie",
        "movie_deleted": "Movie deleted successfully",
        "list_failed": "Failed to list movies",
    },
}


def t(key, locale=None):
    """
    메시지 키를 현재 로케일(config.MESSAGE_LOCALE)의 문자열로 변환합니다.
    - 모르는 로케일이면 DEFAULT_LOCALE로 대체
    - 모르는 키는 KeyError (오타를 조용히 넘기지 않음)
    """
    catalog = CATALOG.get(locale or config.MESSAGE_LOCALE) or CATALOG[DEFAULT_LOCALE]
    return catalog[key]
