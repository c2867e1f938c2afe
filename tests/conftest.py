import os
import tempfile

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_marketplace.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["FIRST_ADMIN_USERNAME"] = "admin"
os.environ["FIRST_ADMIN_PASSWORD"] = "AdminTest123!"
os.environ["GHN_TOKEN"] = ""
os.environ["SMTP_HOST"] = ""

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from marketplace.core.security import build_scope, create_access_token, get_password_hash
from marketplace.db.models.address import Address as AddressModel
from marketplace.db.models.location import District, Province, Ward
from marketplace.db.models.role import USER_ROLE, Role as RoleModel
from marketplace.db.models.shop import Shop as ShopModel
from marketplace.db.models.product import Product as ProductModel
from marketplace.db.models.user import User as UserModel
from marketplace.main import app

# Province -> district -> ward codes used across tests. District codes are
# numeric because the shipping API expects integer ids.
HANOI = "01"
HCMC = "79"
HAI_BA_TRUNG = "1488"
DONG_DA = "1489"
DISTRICT_1 = "1442"
BACH_KHOA = "20308"
KIM_LIEN = "20402"
BEN_NGHE = "20101"


def create_test_user(
    db: Session,
    username: str,
    password: str,
    email: str,
    role_names: tuple[str, ...] = (USER_ROLE,),
    ward_code: str | None = None,
) -> UserModel:
    roles = db.query(RoleModel).filter(RoleModel.name.in_(role_names)).all()
    address = None
    if ward_code is not None:
        address = AddressModel(
            name=username, phone="0900000000", address_detail="1 Test St", ward_code=ward_code
        )
    user = UserModel(
        username=username,
        password_hash=get_password_hash(password),
        email=email,
        roles=roles,
        address=address,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def token_for(user: UserModel) -> str:
    return create_access_token(user.username, build_scope(user.role_names))


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
        poolclass=None,
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    # Run Alembic migrations to set up the database schema and seed data
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from marketplace.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def locations(db: Session) -> dict:
    """Two provinces with a few districts and wards."""
    db.add_all(
        [
            Province(code=HANOI, full_name="Ha Noi"),
            Province(code=HCMC, full_name="Ho Chi Minh"),
            District(code=HAI_BA_TRUNG, full_name="Hai Ba Trung", province_code=HANOI),
            District(code=DONG_DA, full_name="Dong Da", province_code=HANOI),
            District(code=DISTRICT_1, full_name="Quan 1", province_code=HCMC),
            Ward(code=BACH_KHOA, full_name="Bach Khoa", district_code=HAI_BA_TRUNG),
            Ward(code=KIM_LIEN, full_name="Kim Lien", district_code=DONG_DA),
            Ward(code=BEN_NGHE, full_name="Ben Nghe", district_code=DISTRICT_1),
        ]
    )
    db.commit()
    return {
        "provinces": [HANOI, HCMC],
        "districts": [HAI_BA_TRUNG, DONG_DA, DISTRICT_1],
        "wards": [BACH_KHOA, KIM_LIEN, BEN_NGHE],
    }


@pytest.fixture(scope="function")
def admin_user(db: Session) -> UserModel:
    """The admin user is created by migration 001."""
    from marketplace.core.config import settings
    from marketplace.repositories.user import get_user_by_username

    user = get_user_by_username(db, settings.first_admin_username)
    if not user:
        raise RuntimeError("Admin user not found. Check migration 001.")
    return user


@pytest.fixture(scope="function")
def admin_token(admin_user: UserModel) -> str:
    return token_for(admin_user)


@pytest.fixture(scope="function")
def buyer(db: Session, locations: dict) -> UserModel:
    """Regular user living in Kim Lien ward."""
    return create_test_user(
        db, "buyer", "BuyerPass123", "buyer@sis.hust.edu.vn", ward_code=KIM_LIEN
    )


@pytest.fixture(scope="function")
def buyer_token(buyer: UserModel) -> str:
    return token_for(buyer)


@pytest.fixture(scope="function")
def seller(db: Session, locations: dict) -> UserModel:
    """Regular user who owns the shops used in catalog tests."""
    return create_test_user(db, "seller", "SellerPass123", "seller@hust.edu.vn")


@pytest.fixture(scope="function")
def seller_token(seller: UserModel) -> str:
    return token_for(seller)


@pytest.fixture(scope="function")
def shop(db: Session, seller: UserModel) -> ShopModel:
    """Seller's shop located in Bach Khoa ward."""
    shop = ShopModel(
        name="Bach Khoa Books",
        owner_id=seller.id,
        address=AddressModel(name="Shop", phone="0911111111", ward_code=BACH_KHOA),
    )
    db.add(shop)
    db.commit()
    db.refresh(shop)
    return shop


@pytest.fixture(scope="function")
def product(db: Session, shop: ShopModel) -> ProductModel:
    product = ProductModel(
        name="calculus textbook", price=120000, weight=500, brand="NXB", shop_id=shop.id
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture(scope="function")
def make_user(db: Session, locations: dict):
    """Factory: ``make_user(username, email, ward_code=None)`` -> (user, token)."""

    def _make(username: str, email: str, ward_code: str | None = None, password="Password123"):
        user = create_test_user(db, username, password, email, ward_code=ward_code)
        return user, token_for(user)

    return _make
