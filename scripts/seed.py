"""
Reset the configured database and fill it with a demo library.
"""
import argparse
import logging
from dotenv import load_dotenv

from learn_note.config import Settings
from learn_note.database import create_db_engine, create_session_factory, drop_db, init_db
from learn_note.models import User, Folder, Topic, Resource
from learn_note.services.classifier import classify
from learn_note.utils.security import get_password_hash

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

load_dotenv()

DEMO_USER = {"email": "demo@learnnote.io", "name": "Demo User", "password": "password123"}

DEMO_LIBRARY = {
    "Java": {
        "Collections": [
            ("HashMap internals", "https://www.youtube.com/watch?v=c3RVW3KGIIE"),
            ("Collections tutorial", "https://docs.oracle.com/javase/tutorial/collections/"),
        ],
        "Streams": [
            ("Stream API overview", "https://docs.oracle.com/javase/8/docs/api/java/util/stream/package-summary.html"),
        ],
    },
    "JavaScript": {
        "Promises": [
            ("Using promises", "https://developer.mozilla.org/en-US/docs/Web/JavaScript/Guide/Using_promises"),
            ("Event loop talk", "https://www.youtube.com/watch?v=8aGhZQkoFbQ"),
        ],
    },
}


def seed(database_url: str) -> None:
    engine = create_db_engine(database_url)
    logger.info(f"Resetting tables on {engine.url.render_as_string(hide_password=True)}")
    drop_db(engine)
    init_db(engine)

    db = create_session_factory(engine)()
    try:
        user = User(
            email=DEMO_USER["email"],
            name=DEMO_USER["name"],
            password=get_password_hash(DEMO_USER["password"]),
            topic_order=[],
        )
        db.add(user)
        db.flush()

        topic_ids = []
        for folder_title, topics in DEMO_LIBRARY.items():
            folder = Folder(user_id=user.id, title=folder_title)
            db.add(folder)
            db.flush()

            for topic_title, links in topics.items():
                topic = Topic(user_id=user.id, parent=folder.id, title=topic_title, notebook={"ops": []})
                db.add(topic)
                db.flush()
                topic_ids.append(topic.id)

                resource_ids = []
                for title, uri in links:
                    classification = classify(uri)
                    resource = Resource(
                        user_id=user.id,
                        parent=topic.id,
                        title=title,
                        uri=classification.uri,
                        type=classification.type,
                    )
                    db.add(resource)
                    db.flush()
                    resource_ids.append(resource.id)
                topic.resource_order = resource_ids

        user.topic_order = topic_ids
        db.commit()
        logger.info(f"Seeded {len(topic_ids)} topics for {user.email}")
    finally:
        db.close()
        engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed the Learn Note database with demo data")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    args = parser.parse_args()

    seed(args.database_url or Settings().DATABASE_URL)


if __name__ == "__main__":
    main()
