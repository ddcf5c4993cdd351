"""
Application state container.

Holds every entity collection in memory and writes the affected
collection back to storage immediately after each mutation. Nothing here
is global: callers create one ``AppState`` and pass it where needed.
"""

from swipelite.config import get_logger
from swipelite.core.entities import (
    BusinessProfile,
    Customer,
    Invoice,
    InvoiceStatus,
    InvoiceTemplate,
    Product,
)
from swipelite.core.exceptions import (
    EntityNotFoundError,
    LastEntityError,
    ProtectedEntityError,
    ValidationError,
)
from swipelite.core.services.document import InvoiceDocument, assemble_document
from swipelite.core.services.numbering import generate_sku, new_id
from swipelite.core.services.pricing import apply_totals
from swipelite.infrastructure.storage.repository import CollectionRepository, StorageKey

logger = get_logger(__name__)


class AppState:
    """In-memory collections with write-through persistence."""

    def __init__(
        self,
        repository: CollectionRepository,
        *,
        invoices: list[Invoice] | None = None,
        profiles: list[BusinessProfile] | None = None,
        active_profile_id: str | None = None,
        products: list[Product] | None = None,
        customers: list[Customer] | None = None,
        templates: list[InvoiceTemplate] | None = None,
    ):
        self._repo = repository
        self._invoices = list(invoices) if invoices is not None else []
        self._profiles = list(profiles) if profiles else CollectionRepository.seed(StorageKey.PROFILES)
        self._active_profile_id = active_profile_id or self._profiles[0].id
        self._products = list(products) if products is not None else []
        self._customers = list(customers) if customers is not None else []
        self._templates = list(templates) if templates else CollectionRepository.seed(StorageKey.TEMPLATES)

    @classmethod
    async def load(cls, repository: CollectionRepository) -> "AppState":
        """Hydrate every collection from storage."""
        state = cls(
            repository,
            invoices=await repository.load(StorageKey.INVOICES),
            profiles=await repository.load(StorageKey.PROFILES),
            active_profile_id=await repository.load(StorageKey.ACTIVE_PROFILE_ID),
            products=await repository.load(StorageKey.PRODUCTS),
            customers=await repository.load(StorageKey.CUSTOMERS),
            templates=await repository.load(StorageKey.TEMPLATES),
        )
        logger.info(
            "app_state_loaded",
            invoices=len(state._invoices),
            profiles=len(state._profiles),
            products=len(state._products),
            customers=len(state._customers),
            templates=len(state._templates),
        )
        return state

    async def close(self) -> None:
        await self._repo.store.close()

    async def _persist(self, key: StorageKey) -> None:
        value = {
            StorageKey.INVOICES: self._invoices,
            StorageKey.PROFILES: self._profiles,
            StorageKey.ACTIVE_PROFILE_ID: self._active_profile_id,
            StorageKey.PRODUCTS: self._products,
            StorageKey.CUSTOMERS: self._customers,
            StorageKey.TEMPLATES: self._templates,
        }[key]
        await self._repo.save(key, value)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def invoices(self) -> list[Invoice]:
        return list(self._invoices)

    @property
    def profiles(self) -> list[BusinessProfile]:
        return list(self._profiles)

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    @property
    def customers(self) -> list[Customer]:
        return list(self._customers)

    @property
    def templates(self) -> list[InvoiceTemplate]:
        return list(self._templates)

    @property
    def active_profile_id(self) -> str:
        return self._active_profile_id

    @property
    def active_profile(self) -> BusinessProfile:
        """The selected profile, or the first one if the id is stale."""
        return self.get_profile(self._active_profile_id) or self._profiles[0]

    @property
    def default_template(self) -> InvoiceTemplate:
        return next((t for t in self._templates if t.is_default), self._templates[0])

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        return next((i for i in self._invoices if i.id == invoice_id), None)

    def find_invoice(self, invoice_number: str) -> Invoice | None:
        return next((i for i in self._invoices if i.invoice_number == invoice_number), None)

    def get_profile(self, profile_id: str) -> BusinessProfile | None:
        return next((p for p in self._profiles if p.id == profile_id), None)

    def get_product(self, product_id: str) -> Product | None:
        return next((p for p in self._products if p.id == product_id), None)

    def get_customer(self, customer_id: str) -> Customer | None:
        return next((c for c in self._customers if c.id == customer_id), None)

    def get_template(self, template_id: str) -> InvoiceTemplate | None:
        return next((t for t in self._templates if t.id == template_id), None)

    def template_for(self, invoice: Invoice) -> InvoiceTemplate:
        """The invoice's own template, else the current default."""
        if invoice.template_id:
            template = self.get_template(invoice.template_id)
            if template is not None:
                return template
        return self.default_template

    def assemble_for_invoice(self, invoice: Invoice) -> InvoiceDocument:
        """Build the render document for a stored invoice."""
        return assemble_document(
            profile=self.get_profile(invoice.profile_id) or self.active_profile,
            customer=self.get_customer(invoice.customer_id),
            template=self.template_for(invoice),
            items=invoice.items,
            custom_field_data=invoice.custom_field_data,
            invoice_number=invoice.invoice_number,
            date=invoice.date,
            status=invoice.status,
        )

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    async def save_invoice(self, invoice: Invoice) -> Invoice:
        """
        Insert a new invoice at the front, or replace one with the same id.

        Totals are recomputed from the items before storing.
        """
        if not invoice.customer_id:
            raise ValidationError("customer_id", "Please select a customer")
        if not invoice.items:
            raise ValidationError("items", "Please add at least one item")

        stored = apply_totals(invoice.model_copy(deep=True))

        duplicate = next(
            (
                i
                for i in self._invoices
                if i.invoice_number == stored.invoice_number and i.id != stored.id
            ),
            None,
        )
        if duplicate is not None:
            logger.warning(
                "invoice_number_duplicate",
                invoice_number=stored.invoice_number,
                existing_id=duplicate.id,
            )

        for idx, existing in enumerate(self._invoices):
            if existing.id == stored.id:
                self._invoices[idx] = stored
                break
        else:
            self._invoices.insert(0, stored)

        await self._persist(StorageKey.INVOICES)
        logger.info(
            "invoice_saved",
            invoice_id=stored.id,
            invoice_number=stored.invoice_number,
            grand_total=stored.grand_total,
        )
        return stored

    async def delete_invoice(self, invoice_id: str) -> None:
        if self.get_invoice(invoice_id) is None:
            raise EntityNotFoundError("Invoice", invoice_id)
        self._invoices = [i for i in self._invoices if i.id != invoice_id]
        await self._persist(StorageKey.INVOICES)
        logger.info("invoice_deleted", invoice_id=invoice_id)

    async def set_invoice_status(self, invoice_id: str, status: InvoiceStatus) -> Invoice:
        for idx, existing in enumerate(self._invoices):
            if existing.id == invoice_id:
                updated = existing.model_copy(update={"status": status})
                self._invoices[idx] = updated
                await self._persist(StorageKey.INVOICES)
                logger.info("invoice_status_changed", invoice_id=invoice_id, status=status.value)
                return updated
        raise EntityNotFoundError("Invoice", invoice_id)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    @staticmethod
    def _check_product(product: Product) -> None:
        if not product.name.strip():
            raise ValidationError("name", "Product name is required")
        if not product.price:
            raise ValidationError("price", "Product price is required", product.price)

    async def add_product(self, product: Product) -> Product:
        self._check_product(product)
        updates: dict = {}
        if not product.id:
            updates["id"] = new_id()
        if not product.sku:
            updates["sku"] = generate_sku()
        stored = product.model_copy(update=updates, deep=True)
        self._products.append(stored)
        await self._persist(StorageKey.PRODUCTS)
        logger.info("product_added", product_id=stored.id, sku=stored.sku)
        return stored

    async def update_product(self, product: Product) -> Product:
        """Replace a product. Invoices already saved keep their snapshots."""
        self._check_product(product)
        for idx, existing in enumerate(self._products):
            if existing.id == product.id:
                self._products[idx] = product.model_copy(deep=True)
                await self._persist(StorageKey.PRODUCTS)
                logger.info("product_updated", product_id=product.id)
                return self._products[idx]
        raise EntityNotFoundError("Product", product.id)

    async def delete_product(self, product_id: str) -> None:
        if self.get_product(product_id) is None:
            raise EntityNotFoundError("Product", product_id)
        self._products = [p for p in self._products if p.id != product_id]
        await self._persist(StorageKey.PRODUCTS)
        logger.info("product_deleted", product_id=product_id)

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    async def add_customer(self, customer: Customer) -> Customer:
        if not customer.name.strip():
            raise ValidationError("name", "Customer name is required")
        stored = customer.model_copy(update={"id": customer.id or new_id()})
        self._customers.append(stored)
        await self._persist(StorageKey.CUSTOMERS)
        logger.info("customer_added", customer_id=stored.id)
        return stored

    async def update_customer(self, customer: Customer) -> Customer:
        if not customer.name.strip():
            raise ValidationError("name", "Customer name is required")
        for idx, existing in enumerate(self._customers):
            if existing.id == customer.id:
                self._customers[idx] = customer.model_copy()
                await self._persist(StorageKey.CUSTOMERS)
                return self._customers[idx]
        raise EntityNotFoundError("Customer", customer.id)

    async def delete_customer(self, customer_id: str) -> None:
        """Remove a customer; invoices referencing it are left untouched."""
        if self.get_customer(customer_id) is None:
            raise EntityNotFoundError("Customer", customer_id)
        self._customers = [c for c in self._customers if c.id != customer_id]
        await self._persist(StorageKey.CUSTOMERS)
        logger.info("customer_deleted", customer_id=customer_id)

    # ------------------------------------------------------------------
    # Business profiles
    # ------------------------------------------------------------------

    async def add_profile(self, profile: BusinessProfile) -> BusinessProfile:
        if not profile.name.strip():
            raise ValidationError("name", "Business name is required")
        stored = profile.model_copy(update={"id": profile.id or new_id(), "is_default": False})
        self._profiles.append(stored)
        await self._persist(StorageKey.PROFILES)
        logger.info("profile_added", profile_id=stored.id)
        return stored

    async def switch_profile(self, profile_id: str) -> BusinessProfile:
        """Make *profile_id* the active and only default profile."""
        if self.get_profile(profile_id) is None:
            raise EntityNotFoundError("BusinessProfile", profile_id)
        self._profiles = [
            p.model_copy(update={"is_default": p.id == profile_id}) for p in self._profiles
        ]
        self._active_profile_id = profile_id
        await self._persist(StorageKey.PROFILES)
        await self._persist(StorageKey.ACTIVE_PROFILE_ID)
        logger.info("profile_switched", profile_id=profile_id)
        return self.active_profile

    async def delete_profile(self, profile_id: str) -> None:
        """
        Delete a profile.

        The last remaining profile cannot be deleted. Deleting the active or
        default profile hands both roles to the first remaining one.
        """
        removed = self.get_profile(profile_id)
        if removed is None:
            raise EntityNotFoundError("BusinessProfile", profile_id)
        if len(self._profiles) == 1:
            raise LastEntityError("business profile")

        self._profiles = [p for p in self._profiles if p.id != profile_id]
        await self._persist(StorageKey.PROFILES)

        if removed.is_default or self._active_profile_id == profile_id:
            await self.switch_profile(self._profiles[0].id)
        logger.info("profile_deleted", profile_id=profile_id)

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    @staticmethod
    def create_template(name: str = "New Custom Template") -> InvoiceTemplate:
        """A fresh custom template, not stored until saved."""
        return InvoiceTemplate(id=new_id(), name=name, is_default=False)

    async def save_template(self, template: InvoiceTemplate) -> InvoiceTemplate:
        """
        Insert a custom template, or replace an existing one.

        Default status is kept from the stored copy; use
        :meth:`set_default_template` to change it.
        """
        if template.is_builtin:
            raise ProtectedEntityError("InvoiceTemplate", template.id, "edited")
        if not template.name.strip():
            raise ValidationError("name", "Template name is required")

        existing = self.get_template(template.id)
        stored = template.model_copy(
            update={"is_default": existing.is_default if existing else False},
            deep=True,
        )
        if existing is not None:
            self._templates = [stored if t.id == stored.id else t for t in self._templates]
        else:
            self._templates.append(stored)

        await self._persist(StorageKey.TEMPLATES)
        logger.info(
            "template_saved",
            template_id=stored.id,
            fields=len(stored.custom_fields),
            paper_format=stored.paper_format.value,
        )
        return stored

    async def set_default_template(self, template_id: str) -> InvoiceTemplate:
        if self.get_template(template_id) is None:
            raise EntityNotFoundError("InvoiceTemplate", template_id)
        self._templates = [
            t.model_copy(update={"is_default": t.id == template_id}) for t in self._templates
        ]
        await self._persist(StorageKey.TEMPLATES)
        logger.info("template_default_set", template_id=template_id)
        return self.default_template

    async def delete_template(self, template_id: str) -> None:
        """
        Delete a custom template.

        The built-in template and the last remaining template are kept.
        Deleting the default hands default status to the first remaining one.
        """
        removed = self.get_template(template_id)
        if removed is None:
            raise EntityNotFoundError("InvoiceTemplate", template_id)
        if removed.is_builtin:
            raise ProtectedEntityError("InvoiceTemplate", template_id, "deleted")
        if len(self._templates) == 1:
            raise LastEntityError("invoice template")

        self._templates = [t for t in self._templates if t.id != template_id]
        if removed.is_default:
            first = self._templates[0]
            self._templates[0] = first.model_copy(update={"is_default": True})

        await self._persist(StorageKey.TEMPLATES)
        logger.info("template_deleted", template_id=template_id)
