"""バージョン情報管理モジュール"""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)

__app_name__ = "Tide Pipeline"
__description__ = "horaire-maree.fr の潮汐ページを取得・解析するツール"


def get_version():
    """バージョン文字列を取得する"""
    return __version__


def get_full_title():
    """完全なアプリケーションタイトルを取得する"""
    return f"{__app_name__} v{__version__}"
