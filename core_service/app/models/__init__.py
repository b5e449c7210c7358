# Import all models to ensure they are registered with SQLAlchemy
from .users import Users
from .person import Person
from .categories import Category
from .products import Product, product_category
from .provisioning_outbox import ProvisioningOutbox, OutboxStatus
