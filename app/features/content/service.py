import logging
from typing import List
from sqlalchemy.orm import Session, selectinload
from app.models.section import Section
from app.models.system import System

logger = logging.getLogger(__name__)

# Initial directory inserted on a fresh store
SAMPLE_CONTENT = [
    ("Gestión Administrativa", "Briefcase", [
        ("ERP Central", "Gestión integral de recursos.", "LayoutDashboard", "from-blue-500 to-cyan-500"),
        ("Recursos Humanos", "Portal del empleado y nóminas.", "Users", "from-purple-500 to-pink-500"),
        ("CRM Ventas", "Gestión de clientes y leads.", "ShoppingCart", "from-orange-500 to-red-500"),
    ]),
    ("Análisis y Datos", "Database", [
        ("Analytics & BI", "Reportes de inteligencia.", "BarChart3", "from-emerald-500 to-green-500"),
        ("Finanzas", "Control financiero y auditoría.", "BarChart3", "from-teal-400 to-emerald-600"),
    ]),
    ("Infraestructura TI", "Server", [
        ("Seguridad IT", "Control de accesos y logs.", "ShieldCheck", "from-indigo-500 to-blue-600"),
        ("Cloud Panel", "Servidores y despliegues.", "CloudCog", "from-yellow-400 to-orange-500"),
    ]),
]

def list_sections(db: Session) -> List[Section]:
    """Every section in display order, each with its systems already loaded in order."""
    return (
        db.query(Section)
        .options(selectinload(Section.systems))
        .order_by(Section.sort_order.asc(), Section.id.asc())
        .all()
    )

def seed_sample_content(db: Session) -> bool:
    if db.query(Section).first():
        return False
    for section_order, (title, icon, systems) in enumerate(SAMPLE_CONTENT, start=1):
        section = Section(title=title, icon=icon, sort_order=section_order)
        section.systems = [
            System(title=s_title, description=description, url="#", icon=s_icon, color=color, sort_order=order)
            for order, (s_title, description, s_icon, color) in enumerate(systems, start=1)
        ]
        db.add(section)
    db.commit()
    logger.info("Inserted sample content (%d sections)", len(SAMPLE_CONTENT))
    return True
