"""
Пакет BarGen
============

Генератор тестовых штрихкодов для весового и маркировочного оборудования.

Этот пакет предоставляет:
    - Коды DataMatrix GS1 по шаблонам "Тип 1" (табак/вода) и "Тип 2" (одежда/обувь)
    - Весовые штрихкоды CAS (77), со скидкой (49), EAN-13 весовые (22)
    - Штрихкоды по конфигурации полей (47, 49, 44, 77, 22) с контрольной цифрой
    - Простые коды CODE128 / EAN13 / UPC / ITF14 с автодополнением EAN-13
    - Историю генерации, папки, карусель и JSON-хранилище

Пример базового использования:
    >>> from bargen import encode_datamatrix, generate_weight_barcode, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> dm = encode_datamatrix("4810099003310", "type1")
    >>> bc = generate_weight_barcode("22", "12345", 6789)
    >>> bc.code
    '2212345067893'
    >>> logger.info("Сгенерировано %d символов DataMatrix", len(dm))

Управление конфигурацией:
    >>> import os
    >>> os.environ['BARGEN_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from bargen import load_config
    >>> config = load_config()
    >>> config["max_history_items"]
    50

Автор: BarGen Development Team
Версия: 0.1.0
Лицензия: MIT
Python: 3.10+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "BarGen Development Team"
__description__ = "Test barcode generator for GS1 DataMatrix and retail weight barcodes"
__license__ = "MIT"
__python_requires__ = ">=3.10"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"BarGen требует Python 3.10 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

LOGGER_NAME = "bargen"


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Консольный обработчик (stderr) для WARNING и выше, ротирующий
    файловый обработчик для всех уровней. Уровень задаётся переменной
    окружения BARGEN_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Идемпотентна: повторные вызовы ничего не меняют.
    """
    log_level_str = os.environ.get("BARGEN_LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(LOGGER_NAME)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    try:
        log_dir = Path(os.environ.get("BARGEN_LOG_DIR", "logs"))
        log_dir.mkdir(exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "bargen.log",
            maxBytes=10 * 1024 * 1024,  # 10 МБ
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except (OSError, PermissionError) as e:
        root_logger.warning(
            "Не удалось инициализировать файловое логирование: %s. Используется только консоль.",
            e,
        )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён 'bargen'.

    Аргументы:
        module_name: Имя модуля, обычно `__name__`.

    Возвращает:
        logging.Logger с именем 'bargen.<module_name>'.

    Пример:
        >>> get_logger("tools").name
        'bargen.tools'
        >>> get_logger("__main__").name
        'bargen.main'
    """
    if module_name == LOGGER_NAME or module_name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{LOGGER_NAME}.main")
    clean_name = module_name.lstrip(".")
    return logging.getLogger(f"{LOGGER_NAME}.{clean_name}")


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "default_interval": 0.7,
    "max_history_items": 50,
    "storage_path": "bargen_data.json",
    "default_template": "type1",
    "weight_min": 150,
    "weight_max": 8000,
    "weight_fixed": 500,
    "discount_min": 5,
    "discount_max": 30,
    "discount_fixed": 0,
    "log_level": "INFO",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию из bargen.json или вернуть настройки по умолчанию.

    Ключи конфигурации:
        - default_interval: float - Интервал карусели, секунды
        - max_history_items: int - Размер истории генерации
        - storage_path: str - Путь к JSON-хранилищу
        - default_template: str - Шаблон DataMatrix по умолчанию
        - weight_min / weight_max / weight_fixed: int - Вес, граммы
        - discount_min / discount_max / discount_fixed: int - Скидка, %
        - log_level: str - Уровень логирования

    Аргументы:
        config_path: Путь к файлу. Если None, ищет 'bargen.json' в текущем каталоге.

    Возвращает:
        Словарь со всеми ключами по умолчанию, поверх которых наложены
        пользовательские значения.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path("bargen.json")

    config = _DEFAULT_CONFIG.copy()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Файл конфигурации должен содержать JSON-объект, "
                    f"получен {type(user_config).__name__}"
                )

            config.update(user_config)
            logger.info("Конфигурация загружена из %s", config_path)
            logger.debug("Конфигурация: %s", config)

        except json.JSONDecodeError as e:
            logger.warning(
                "Не удалось разобрать %s: недопустимый JSON в строке %d, столбце %d. "
                "Используется конфигурация по умолчанию.",
                config_path,
                e.lineno,
                e.colno,
            )
        except (OSError, PermissionError) as e:
            logger.warning(
                "Не удалось прочитать %s: %s. Используется конфигурация по умолчанию.",
                config_path,
                e,
            )
        except ValueError as e:
            logger.warning(
                "Недопустимый формат конфигурации: %s. Используется конфигурация по умолчанию.",
                e,
            )
    else:
        logger.debug("Файл конфигурации %s не найден, используются значения по умолчанию", config_path)

    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить доступность библиотек рендеринга.

    Кодировщики не зависят от внешних пакетов; рендереры используют:
        - python-barcode: линейные штрихкоды
        - pillow: изображения
        - treepoem: DataMatrix (требует Ghostscript)

    Возвращает:
        Словарь {имя пакета: доступен}.
    """
    dependencies: Dict[str, bool] = {}

    try:
        import barcode  # noqa: F401

        dependencies["python-barcode"] = True
    except ImportError:
        dependencies["python-barcode"] = False

    try:
        import PIL  # noqa: F401

        dependencies["pillow"] = True
    except ImportError:
        dependencies["pillow"] = False

    try:
        import treepoem  # noqa: F401

        dependencies["treepoem"] = True
    except ImportError:
        dependencies["treepoem"] = False

    return dependencies


# =============================================================================
# ИНИЦИАЛИЗАЦИЯ ПАКЕТА
# =============================================================================

# Логирование настраивается до импорта подмодулей
_setup_logging()

from .barcodegen.checksum import ean13_checksum, is_valid_ean13, mod10_digit_sum  # noqa: E402
from .barcodegen.datamatrix import (  # noqa: E402
    GS,
    TEMPLATES,
    encode_datamatrix,
    generate_type1,
    generate_type2,
)
from .barcodegen.errors import BarcodeGenError, FieldValidationError  # noqa: E402
from .barcodegen.linear import (  # noqa: E402
    FIELD_CONFIGS,
    generate_from_field_config,
    generate_simple,
    generate_weight_barcode,
    validate_field_values,
)
from .barcodegen.padding import pad_gtin14, zero_pad  # noqa: E402
from .barcodegen.tokens import random_digits, random_from  # noqa: E402
from .model.codes import (  # noqa: E402
    BarcodeFieldConfig,
    DataMatrixCode,
    EncodedCode,
    FieldSpec,
    WeightBarcode,
)
from .model.enums import (  # noqa: E402
    BarcodeFamily,
    BarcodeFormat,
    ChecksumAlgorithm,
    HistoryType,
    TemplateId,
    WeightPrefix,
)

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "check_dependencies",
    # Примитивы
    "random_from",
    "random_digits",
    "zero_pad",
    "pad_gtin14",
    "mod10_digit_sum",
    "ean13_checksum",
    "is_valid_ean13",
    # DataMatrix
    "GS",
    "TEMPLATES",
    "generate_type1",
    "generate_type2",
    "encode_datamatrix",
    # Линейные коды
    "FIELD_CONFIGS",
    "generate_weight_barcode",
    "generate_from_field_config",
    "validate_field_values",
    "generate_simple",
    # Модель
    "EncodedCode",
    "WeightBarcode",
    "DataMatrixCode",
    "FieldSpec",
    "BarcodeFieldConfig",
    "BarcodeFamily",
    "BarcodeFormat",
    "ChecksumAlgorithm",
    "HistoryType",
    "TemplateId",
    "WeightPrefix",
    # Ошибки
    "BarcodeGenError",
    "FieldValidationError",
]

_logger = get_logger(__name__)
_logger.debug("BarGen v%s инициализирован (Python %s)", __version__, sys.version.split()[0])
