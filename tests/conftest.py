import os
import sys
from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add the project root to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from api import router as api_router
from api.error_handlers import register_error_handlers
from database import Base, get_db, init_models
from models import Listing, Notification, Post, User

init_models()

# Create a test app with every router and the error handlers, but no lifespan
def create_test_app():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")
    return app

test_app = create_test_app()

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixtures
@pytest.fixture(scope="function")
def test_db():
    # Fresh schema for every test; services commit, so there is nothing to roll back
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def client(test_db):
    """Create a test client that uses the test database."""
    def override_get_db():
        # The session is managed by the test_db fixture
        yield test_db

    test_app.dependency_overrides[get_db] = override_get_db

    with TestClient(test_app) as client:
        yield client

    test_app.dependency_overrides.clear()

# Model factories
@pytest.fixture
def create_user(test_db):
    """Factory to create a test user. Usernames and e-mails are unique per call."""
    counter = {"n": 0}

    def _create_user(**kwargs):
        counter["n"] += 1
        user_data = {
            "username": f"testuser{counter['n']}",
            "email": f"test{counter['n']}@example.com",
            "display_name": "Test User",
        }
        user_data.update(kwargs)

        user = User(**user_data)
        test_db.add(user)
        test_db.commit()
        test_db.refresh(user)
        return user
    return _create_user

@pytest.fixture
def create_post(test_db, create_user):
    """Factory to create a test post. Counters are not touched."""
    def _create_post(**kwargs):
        if 'user_id' not in kwargs:
            kwargs['user_id'] = create_user().id

        post_data = {
            "content": "This is a test post",
            **kwargs
        }

        post = Post(**post_data)
        test_db.add(post)
        test_db.commit()
        test_db.refresh(post)
        return post
    return _create_post

@pytest.fixture
def create_listing(test_db, create_user):
    """Factory to create an active listing priced 99.99 USD."""
    def _create_listing(**kwargs):
        if 'user_id' not in kwargs:
            kwargs['user_id'] = create_user().id

        listing_data = {
            "title": "iPhone 15 Pro",
            "description": "Barely used, comes with the original box",
            "price": Decimal("99.99"),
            "currency": "USD",
            "category": "electronics",
            "condition": "like_new",
            "location": "New York, NY",
            **kwargs
        }

        listing = Listing(**listing_data)
        test_db.add(listing)
        test_db.commit()
        test_db.refresh(listing)
        return listing
    return _create_listing

@pytest.fixture
def create_notification(test_db, create_user):
    """Factory to create a test notification."""
    def _create_notification(**kwargs):
        if 'user_id' not in kwargs:
            kwargs['user_id'] = create_user().id

        notification_data = {
            "type": "like",
            "title": "New like",
            "message": "Someone liked your post",
            **kwargs
        }

        notification = Notification(**notification_data)
        test_db.add(notification)
        test_db.commit()
        test_db.refresh(notification)
        return notification
    return _create_notification
