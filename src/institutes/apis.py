from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from src.chain import clients
from src.core.apis import BaseAPIController
from src.core.policies import ensure_registry_admin, ensure_staff
from src.institutes import selectors, services
from src.institutes.presenters import institute_to_dto
from src.institutes.schemas import InstituteCreatePayload, InstitutePatchPayload, NamePayload, NamesPayload


@api_controller("/institutes", tags=["Institutes"])
class InstituteController(BaseAPIController):
    """
    Lecture publique du registre; les écritures sont signées par le
    portefeuille serveur (CHAIN_SIGNER_PRIVATE_KEY), "me" désigne cet institut.
    """

    def _writer(self):
        ensure_staff(self.context.request.auth)
        return clients.get_registry(), clients.get_default_signer()

    def _audit_ctx(self) -> dict:
        request = self.context.request
        return {"user": request.auth, "request": request}

    @route.get("/", auth=None)
    def list_institutes(self):
        items = selectors.institute_list(registry=clients.get_registry())
        return self.create_response(
            message="Institutes",
            data={"count": len(items), "items": [institute_to_dto(i) for i in items]},
        )

    @route.post("/", auth=JWTAuth())
    def add_institute(self, payload: InstituteCreatePayload):
        ensure_registry_admin(self.context.request.auth)
        registry, signer = clients.get_registry(), clients.get_default_signer()
        tx_hash = services.institute_add(
            registry=registry,
            signer=signer,
            wallet=payload.wallet,
            name=payload.name,
            address=payload.address,
            acronym=payload.acronym,
            link=payload.link,
            degrees=payload.degrees,
            departments=payload.departments,
            **self._audit_ctx(),
        )
        institute = selectors.institute_get(registry=registry, address=payload.wallet)
        return self.create_response(
            message="Institute added successfully",
            data=institute_to_dto(institute),
            extra={"tx_hash": tx_hash},
            status_code=201,
        )

    @route.get("/me", auth=JWTAuth())
    def my_institute(self):
        registry, signer = self._writer()
        institute = selectors.institute_get(registry=registry, address=signer.address)
        return self.create_response(message="Institute", data=institute_to_dto(institute))

    @route.patch("/me", auth=JWTAuth())
    def update_institute(self, payload: InstitutePatchPayload):
        registry, signer = self._writer()
        tx_hashes = services.institute_update(
            registry=registry, signer=signer, changes=payload.model_dump(exclude_none=True), **self._audit_ctx()
        )
        institute = registry.get_institute(signer.address)
        return self.create_response(message="Institute updated", data=institute_to_dto(institute),
                                    extra={"tx_hashes": tx_hashes})

    # Degrees
    @route.post("/me/degrees", auth=JWTAuth())
    def add_degrees(self, payload: NamesPayload):
        return self._list_add("degrees", payload.names)

    @route.put("/me/degrees/{index}", auth=JWTAuth())
    def update_degree(self, index: int, payload: NamePayload):
        return self._list_update("degrees", index, payload.name)

    @route.delete("/me/degrees/{index}", auth=JWTAuth())
    def remove_degree(self, index: int):
        return self._list_remove("degrees", index)

    @route.delete("/me/degrees", auth=JWTAuth())
    def clear_degrees(self):
        return self._list_clear("degrees")

    # Departments
    @route.post("/me/departments", auth=JWTAuth())
    def add_departments(self, payload: NamesPayload):
        return self._list_add("departments", payload.names)

    @route.put("/me/departments/{index}", auth=JWTAuth())
    def update_department(self, index: int, payload: NamePayload):
        return self._list_update("departments", index, payload.name)

    @route.delete("/me/departments/{index}", auth=JWTAuth())
    def remove_department(self, index: int):
        return self._list_remove("departments", index)

    @route.delete("/me/departments", auth=JWTAuth())
    def clear_departments(self):
        return self._list_clear("departments")

    # Must be registered after the /me routes
    @route.get("/{address}", auth=None)
    def view_institute(self, address: str):
        institute = selectors.institute_get(registry=clients.get_registry(), address=address)
        return self.create_response(message="Institute", data=institute_to_dto(institute))

    def _list_response(self, registry, signer, kind: str, tx_hash: str, message: str):
        institute = registry.get_institute(signer.address)
        return self.create_response(message=message, data={kind: list(getattr(institute, kind))},
                                    extra={"tx_hash": tx_hash})

    def _list_add(self, kind: str, names: list[str]):
        registry, signer = self._writer()
        tx_hash = services.institute_list_add(registry=registry, signer=signer, kind=kind, names=names,
                                              **self._audit_ctx())
        return self._list_response(registry, signer, kind, tx_hash, f"{kind.capitalize()} added")

    def _list_update(self, kind: str, index: int, name: str):
        registry, signer = self._writer()
        tx_hash = services.institute_list_update(registry=registry, signer=signer, kind=kind, index=index,
                                                 name=name, **self._audit_ctx())
        return self._list_response(registry, signer, kind, tx_hash, f"{kind.capitalize()} updated")

    def _list_remove(self, kind: str, index: int):
        registry, signer = self._writer()
        tx_hash = services.institute_list_remove(registry=registry, signer=signer, kind=kind, index=index,
                                                 **self._audit_ctx())
        return self._list_response(registry, signer, kind, tx_hash, f"{kind.capitalize()} removed")

    def _list_clear(self, kind: str):
        registry, signer = self._writer()
        tx_hash = services.institute_list_clear(registry=registry, signer=signer, kind=kind, **self._audit_ctx())
        return self._list_response(registry, signer, kind, tx_hash, f"{kind.capitalize()} cleared")
