from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
import logging

from notaps.config.settings import settings

logger = logging.getLogger(__name__)

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# 创建数据库引擎
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # 在DEBUG模式下输出SQL语句
    pool_pre_ping=True,
    pool_recycle=3600,
    connect_args=_connect_args,
)

# 创建SessionLocal类
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 初始词汇数据
SAMPLE_VOCABULARY = [
    {
        "word": "hello",
        "pronunciation": "həˈloʊ",
        "definition": "a greeting",
        "language": "en",
        "difficulty": "beginner",
        "category": "greetings",
        "translations": {
            "ja": {"word": "こんにちは", "pronunciation": "konnichiwa", "definition": "挨拶"},
            "ko": {"word": "안녕하세요", "pronunciation": "annyeonghaseyo", "definition": "인사말"},
            "fr": {"word": "bonjour", "pronunciation": "bonˈʒʊər", "definition": "salutation"},
            "zh": {"word": "你好", "pronunciation": "nǐ hǎo", "definition": "问候语"},
        },
    },
    {
        "word": "beautiful",
        "pronunciation": "ˈbjutɪfəl",
        "definition": "pleasing the senses or mind aesthetically",
        "language": "en",
        "difficulty": "intermediate",
        "category": "adjectives",
        "translations": {
            "ja": {"word": "美しい", "pronunciation": "utsukushii", "definition": "美的に感覚や心を喜ばせる"},
            "ko": {"word": "아름다운", "pronunciation": "areumdaun", "definition": "감각이나 마음을 미적으로 기쁘게 하는"},
            "fr": {"word": "beau/belle", "pronunciation": "bo/bɛl", "definition": "qui plaît aux sens ou à l'esprit"},
            "zh": {"word": "美丽", "pronunciation": "měi lì", "definition": "在美学上令感官或心灵愉悦的"},
        },
    },
    {
        "word": "opportunity",
        "pronunciation": "ˌɒpəˈtunɪti",
        "definition": "a set of circumstances that makes it possible to do something",
        "language": "en",
        "difficulty": "advanced",
        "category": "nouns",
        "translations": {
            "ja": {"word": "機会", "pronunciation": "kikai", "definition": "何かをすることを可能にする状況"},
            "ko": {"word": "기회", "pronunciation": "gihoe", "definition": "어떤 일을 할 수 있게 해주는 상황"},
            "fr": {"word": "opportunité", "pronunciation": "ɔpɔʁtyniˈte", "definition": "ensemble de circonstances qui rend possible de faire quelque chose"},
            "zh": {"word": "机会", "pronunciation": "jī huì", "definition": "使某事成为可能的一系列情况"},
        },
    },
]


def get_db():
    """获取数据库会话"""
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"数据库会话错误: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def check_db_connection() -> bool:
    """检查数据库连接是否正常"""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"数据库连接检查失败: {e}")
        return False


def create_tables(bind=None):
    """创建所有表"""
    from notaps.models.base import Base
    from notaps.models.vocabulary import VocabularyWord  # noqa: F401
    from notaps.models.word_mastery import WordMastery  # noqa: F401
    from notaps.models.learning_progress import LearningProgress  # noqa: F401
    from notaps.models.study_session import StudySessionRecord  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def seed_data(db: Session):
    """初始化词汇和默认学习进度（已存在则跳过）"""
    from notaps.repositories.vocabulary_repository import VocabularyRepository
    from notaps.repositories.progress_repository import ProgressRepository

    vocabulary_repo = VocabularyRepository(db)
    for word_data in SAMPLE_VOCABULARY:
        if not vocabulary_repo.get_by_word(word_data["word"], word_data["language"]):
            vocabulary_repo.create(**word_data)
            logger.info(f"初始化词汇: {word_data['word']}")

    ProgressRepository(db).get_or_create()


def init_db():
    """初始化数据库表和基础数据"""
    try:
        create_tables()
        logger.info("数据库表初始化完成")

        db = SessionLocal()
        try:
            seed_data(db)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
    except Exception as e:
        logger.error(f"数据库初始化失败: {e}")
        raise
