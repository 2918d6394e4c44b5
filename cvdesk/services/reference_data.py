"""Static option lists used by the capture forms and the catalog seed."""

from __future__ import annotations


LANGUAGES = [
    "English",
    "Afrikaans",
    "isiZulu",
    "isiXhosa",
    "Sesotho",
    "Setswana",
    "Sepedi",
    "isiSwati",
    "Xitsonga",
    "Tshivenda",
    "isiNdebele",
]

GENDERS = ["Male", "Female", "Other"]

SAP_K_LEVELS = ["---n/a---", "K1", "K2", "K3", "K4", "K5", "K6", "K7", "K8"]

QUALIFICATION_MAPPINGS: dict[str, list[str]] = {
    "Higher Certificates and Advanced National Vocational Certificate (NQF 5)": [
        "Higher Certificate in Information Technology",
        "Higher Certificate in Business Management",
        "Higher Certificate in Engineering",
        "Advanced National Vocational Certificate",
    ],
    "National Diplomas and Diplomas (NQF 6)": [
        "National Diploma in Engineering",
        "National Diploma in Information Technology",
        "National Diploma in Business Studies",
        "National Diploma in Marketing",
        "Diploma in Nursing",
    ],
    "Bachelor's degree, Advanced Diploma, Post Graduate Certificates (NQF 7)": [
        "Bachelor of Commerce",
        "Bachelor of Science",
        "Bachelor of Arts",
        "Bachelor of Technology",
        "Bachelor of Engineering",
        "Advanced Diploma in Engineering",
        "Post Graduate Certificate in Education",
    ],
    "Honours Degree, Post Graduate Diploma (NQF 8)": [
        "Bachelor of Commerce Honours",
        "Bachelor of Science Honours",
        "Bachelor of Arts Honours",
        "Post Graduate Diploma in Management",
        "Post Graduate Diploma in Education",
    ],
    "Master's Degree (NQF 9)": [
        "Master of Business Administration",
        "Master of Science",
        "Master of Arts",
        "Master of Engineering",
        "Master of Commerce",
    ],
    "Doctoral Degree (NQF 10)": [
        "Doctor of Philosophy (PhD)",
        "Doctor of Engineering",
        "Doctor of Business Administration",
        "Doctor of Education",
    ],
}

DEPARTMENTS = [
    "Engineering and Technology",
    "Healthcare and Medical Services",
    "Education and Training",
    "Finance and Accounting",
    "Legal and Compliance",
    "Mining and Natural Resources",
    "Agriculture and Food Security",
    "Information Technology",
    "Human Resources and Development",
    "Communications and Media",
    "Construction and Built Environment",
]

# (department, role)
ROLES: list[tuple[str, str]] = [
    ("Engineering and Technology", "Mechanical Engineer"),
    ("Engineering and Technology", "Electrical Engineer"),
    ("Healthcare and Medical Services", "Medical Doctor"),
    ("Healthcare and Medical Services", "Registered Nurse"),
    ("Healthcare and Medical Services", "Pharmacist"),
    ("Education and Training", "Mathematics Teacher"),
    ("Education and Training", "Science Teacher"),
    ("Education and Training", "Language Teacher"),
    ("Finance and Accounting", "Chartered Accountant"),
    ("Finance and Accounting", "Financial Analyst"),
    ("Finance and Accounting", "Tax Consultant"),
    ("Legal and Compliance", "Attorney"),
    ("Legal and Compliance", "Paralegal"),
    ("Legal and Compliance", "Compliance Officer"),
    ("Mining and Natural Resources", "Mining Engineer"),
    ("Mining and Natural Resources", "Geologist"),
    ("Mining and Natural Resources", "Environmental Scientist"),
    ("Agriculture and Food Security", "Agricultural Engineer"),
    ("Agriculture and Food Security", "Veterinarian"),
    ("Agriculture and Food Security", "Food Technologist"),
    ("Information Technology", "Software Developer"),
    ("Information Technology", "Cybersecurity Specialist"),
    ("Information Technology", "Data Analyst"),
    ("Human Resources and Development", "HR Manager"),
    ("Human Resources and Development", "Training and Development Specialist"),
    ("Human Resources and Development", "Skills Development Facilitator"),
    ("Communications and Media", "Digital Marketing Specialist"),
    ("Communications and Media", "Public Relations Officer"),
    ("Communications and Media", "Content Creator"),
    ("Construction and Built Environment", "Architect"),
    ("Construction and Built Environment", "Quantity Surveyor"),
    ("Construction and Built Environment", "Project Manager"),
]


def qualification_types() -> list[str]:
    return list(QUALIFICATION_MAPPINGS)


def roles_for_department(department: str | None = None) -> list[dict[str, str]]:
    return [
        {"department": dept, "role": role}
        for dept, role in ROLES
        if department is None or dept == department
    ]
