import sys
from pathlib import Path

from dotenv import load_dotenv

# Load DATABASE_URL and friends from your .env file before the app settings are read
load_dotenv()

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from crm.core.errors import Conflict
from crm.crud import address_crud, customer_crud
from crm.db.session import SessionLocal, init_db
from crm.schemas.address_schemas import AddressCreate
from crm.schemas.customer_schemas import CustomerCreate

DEMO_CUSTOMERS = [
    ("Jane", "Doe", "9876543210", [("221B Baker St", "Mumbai", "MH", "400001")]),
    ("Arjun", "Mehta", "9123456780", [
        ("12 MG Road, Indiranagar", "Bengaluru", "KA", "560038"),
        ("Flat 4, Lake View Apartments", "Mysuru", "KA", "570001"),
    ]),
    ("Priya", "Sharma", "9988776655", [("7 Park Street", "Kolkata", "WB", "700016")]),
    ("Rahul", "Verma", "9012345678", []),
]


def seed() -> None:
    """
    Inserts a few customers with addresses. Customers whose phone number
    already exists are skipped, so running it twice is harmless.
    """
    init_db()
    db = SessionLocal()
    try:
        for first_name, last_name, phone_number, addresses in DEMO_CUSTOMERS:
            try:
                customer = customer_crud.create_customer(
                    db,
                    CustomerCreate(first_name=first_name, last_name=last_name, phone_number=phone_number),
                )
            except Conflict:
                print(f"Skipping {first_name} {last_name}: phone number already exists")
                continue

            for details, city, state, pin_code in addresses:
                address_crud.create_address(
                    db,
                    customer.id,
                    AddressCreate(address_details=details, city=city, state=state, pin_code=pin_code),
                )
            print(f"Created {first_name} {last_name} (id={customer.id}) with {len(addresses)} address(es)")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
