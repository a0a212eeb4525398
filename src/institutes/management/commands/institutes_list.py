from django.core.management.base import BaseCommand

from src.chain.clients import get_registry


class Command(BaseCommand):
    help = "Print every institute registered on the Institution contract"

    def handle(self, *args, **kwargs):
        registry = get_registry()
        addresses = registry.list_institute_addresses()
        self.stdout.write(f"Total institutes: {len(addresses)}")

        for i, address in enumerate(addresses):
            institute = registry.get_institute(address)
            self.stdout.write(f"\nInstitute #{i}: {address}")
            self.stdout.write(f"  Name: {institute.name}")
            self.stdout.write(f"  Acronym: {institute.acronym}")
            self.stdout.write(f"  Address: {institute.address}")
            self.stdout.write(f"  Link: {institute.link}")
            self.stdout.write(f"  Degrees: {', '.join(institute.degrees) or '-'}")
            self.stdout.write(f"  Departments: {', '.join(institute.departments) or '-'}")
