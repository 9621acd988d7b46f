from utils.ids import create_id_with_prefix
from domain.models import Case, Client, Invoice
from domain.constants import CASE_PRIORITIES, CASE_STATUSES, CASE_TYPES, INVOICE_STATUSES, VAT_RATE
import datetime as dt
import random
from typing import List, Optional

CITIES = ["Riyadh", "Jeddah", "Dammam", "Makkah", "Madinah", "Khobar", "Abha", "Tabuk"]

PERSON_NAMES = [
    ("Mohammed Al-Ahmad", "محمد الأحمد"),
    ("Fatima Al-Zahra", "فاطمة الزهراء"),
    ("Abdullah Al-Qahtani", "عبدالله القحطاني"),
    ("Noura Al-Otaibi", "نورة العتيبي"),
    ("Khalid Al-Harbi", "خالد الحربي"),
    ("Sara Al-Ghamdi", "سارة الغامدي"),
    ("Faisal Al-Dosari", "فيصل الدوسري"),
    ("Reem Al-Shehri", "ريم الشهري"),
]

COMPANY_NAMES = [
    ("ABC Trading Company", "شركة ايه بي سي للتجارة"),
    ("Riyadh Development Co.", "شركة الرياض للتطوير"),
    ("Gulf Logistics Est.", "مؤسسة الخليج للخدمات اللوجستية"),
    ("Najd Contracting", "نجد للمقاولات"),
    ("Red Sea Hospitality", "البحر الأحمر للضيافة"),
]

LAWYERS = ["Omar Al-Faraj", "Huda Al-Mutairi", "Saad Al-Zahrani", "Lama Al-Rasheed"]

CASE_TITLES = {
    'commercial': ("Commercial Contract Dispute", "نزاع عقد تجاري"),
    'labor': ("Employment Termination", "إنهاء الخدمة"),
    'family': ("Family Inheritance Dispute", "نزاع ميراث عائلي"),
    'realEstate': ("Real Estate Transaction", "معاملة عقارية"),
    'criminal': ("Fraud Complaint", "بلاغ احتيال"),
    'administrative': ("Licensing Appeal", "تظلم ترخيص"),
}

SERVICES = [("Legal Consultation", 500), ("Contract Drafting", 1500),
            ("Court Representation", 3000), ("Document Review", 400)]


def _date_within(days: int, rng: random.Random, future: bool = False) -> str:
    offset = rng.randint(0, days)
    delta = dt.timedelta(days=offset if future else -offset)
    return (dt.date.today() + delta).isoformat()


def make_clients(n: int = 12, rng: Optional[random.Random] = None) -> List[Client]:
    """Create n clients mixing individuals and companies."""
    rng = rng or random.Random()
    clients = []
    for i in range(n):
        is_company = rng.random() < 0.4
        name, name_ar = rng.choice(COMPANY_NAMES if is_company else PERSON_NAMES)
        slug = name.lower().replace(' ', '.').replace('-', '').rstrip('.')
        clients.append(Client(
            id=create_id_with_prefix('cl'),
            name=name,
            name_ar=name_ar,
            type='company' if is_company else 'individual',
            email=f"{slug}{i + 1}@example.sa",
            phone=f"+9665{rng.randint(0, 99999999):08d}",
            city=rng.choice(CITIES),
            active_cases=rng.randint(0, 6),
            created_at=_date_within(720, rng),
        ))
    return clients


def make_cases(n: int = 25, client_names: Optional[List[str]] = None,
               rng: Optional[random.Random] = None) -> List[Case]:
    rng = rng or random.Random()
    year = dt.date.today().year
    cases = []
    for i in range(n):
        case_type = rng.choice(CASE_TYPES)
        title, title_ar = CASE_TITLES[case_type]
        client_name = rng.choice(client_names) if client_names else rng.choice(PERSON_NAMES)[0]
        cases.append(Case(
            id=create_id_with_prefix('case'),
            case_number=f"CASE-{year}-{i + 1:03d}",
            title=title,
            title_ar=title_ar,
            client=client_name,
            case_type=case_type,
            priority=rng.choice(CASE_PRIORITIES),
            status=rng.choice(CASE_STATUSES),
            assigned_to={'name': rng.choice(LAWYERS)},
            fees=float(rng.randrange(5000, 150000, 500)),
            description=f"{title} for {client_name}",
            date=_date_within(365, rng),
        ))
    return cases


def make_invoices(n: int = 20, client_names: Optional[List[str]] = None,
                  case_titles: Optional[List[str]] = None,
                  rng: Optional[random.Random] = None) -> List[Invoice]:
    """Create n invoices; totals include 15% VAT."""
    rng = rng or random.Random()
    year = dt.date.today().year
    invoices = []
    for i in range(n):
        description, unit_price = rng.choice(SERVICES)
        quantity = rng.randint(1, 8)
        subtotal = float(quantity * unit_price)
        vat = round(subtotal * VAT_RATE, 2)
        client_name = rng.choice(client_names) if client_names else rng.choice(COMPANY_NAMES)[0]
        case_title = rng.choice(case_titles) if case_titles else CASE_TITLES['commercial'][0]
        invoices.append(Invoice(
            _id=create_id_with_prefix('inv'),
            invoice_number=f"INV-{year}-{i + 1:03d}",
            client={'name': client_name},
            case={'title': case_title},
            items=[{'description': description, 'quantity': quantity,
                    'unit_price': unit_price, 'total': subtotal}],
            subtotal=subtotal,
            vat_amount=vat,
            total_amount=round(subtotal + vat, 2),
            status=rng.choice(INVOICE_STATUSES),
            due_date=_date_within(60, rng, future=True),
            created_at=_date_within(90, rng),
        ))
    return invoices
