# Curriculum backbone bundled with the bot.
# Read-only: inject a different mapping into Catalog for tests or other colleges.

BRANCHES = [
    ("cse", "CSE"),
    ("blockchain", "Blockchain"),
    ("aiads", "AIADS"),
    ("it", "IT"),
    ("cse-iot", "CSE (IoT)"),
    ("ec", "EC"),
    ("ee", "EE"),
    ("ei", "EI"),
    ("me", "ME"),
    ("ce", "CE"),
]

_Y1_COMMON = [
    ("MAB 101", "Engineering Mathematics I"),
    ("CSA 101", "Computer Fundamentals"),
    ("HUB 101", "Communication Skills"),
]

_Y1_S2_CS = [
    ("MAB 102", "Engineering Mathematics II"),
    ("CSA 103", "Data Structures And Algorithms"),
    ("ITC 101", "Python Programming"),
    ("CSL 110", "Linux"),
    ("CSA 104", "System Softwares"),
]

_Y2_S3_CS = [
    ("CSB 201", "Design & Analysis of Algorithms"),
    ("CSB 202", "Operating Systems"),
    ("CSB 203", "Database Management Systems"),
    ("CSB 204", "Object-Oriented Programming"),
]

_Y2_S4_CS = [
    ("CSB 205", "Computer Networks"),
    ("CSB 206", "Software Engineering"),
]

# year -> semester -> branch id -> [(code, name)]
BRANCH_SUBJECTS = {
    1: {
        1: {
            "cse": _Y1_COMMON + [
                ("CHB 101", "Engineering Chemistry"),
                ("CSA 102", "Digital Electronics"),
                ("MAC 101", "Professional Ethics"),
            ],
            "blockchain": _Y1_COMMON + [
                ("CSA 102", "Digital Electronics"),
                ("PYB 101", "Engineering Physics"),
                ("MAC 101", "Professional Ethics"),
            ],
            "aiads": _Y1_COMMON + [
                ("CHB 101", "Engineering Chemistry"),
                ("CSA 102", "Digital Electronics"),
                ("MAC 101", "Professional Ethics"),
            ],
            "it": _Y1_COMMON + [
                ("CSA 102", "Digital Electronics"),
                ("CHB 101", "Engineering Chemistry"),
                ("MAC 101", "Professional Ethics"),
            ],
            "cse-iot": [
                ("MAB 101", "Engineering Mathematics I"),
                ("CSA 101", "Computer Fundamentals"),
                ("PYB 101", "Engineering Physics"),
                ("CSA 102", "Digital Electronics"),
                ("IOA 103", "Basic Electrical Engineering"),
                ("MAC 101", "Professional Ethics"),
            ],
            "ec": _Y1_COMMON + [
                ("ECB 101", "Electrical Engineering"),
                ("ECB 102", "Electrical Machines"),
                ("MAC 101", "Professional Ethics"),
            ],
            "ee": _Y1_COMMON + [
                ("EEB 101", "Electrical Engineering"),
                ("EEB 102", "Electrical Machines"),
                ("MAC 101", "Professional Ethics"),
            ],
            "ei": _Y1_COMMON + [
                ("EIB 101", "Electrical Engineering"),
                ("MAC 101", "Professional Ethics"),
            ],
            "me": [
                ("MAB 101", "Engineering Mathematics I"),
                ("CHB 101", "Engineering Chemistry"),
                ("MEB 101", "Engineering Mechanics"),
                ("PYB 101", "Engineering Physics"),
                ("HUB 101", "Communication Skills"),
                ("MAC 101", "Professional Ethics"),
            ],
            "ce": [
                ("MAB 101", "Engineering Mathematics I"),
                ("CHB 101", "Engineering Chemistry"),
                ("CEB 101", "Civil Engineering Basics"),
                ("PYB 101", "Engineering Physics"),
                ("HUB 101", "Communication Skills"),
                ("MAC 101", "Professional Ethics"),
            ],
        },
        2: {
            "cse": _Y1_S2_CS + [
                ("PYB 101", "Applied Physics"),
                ("MAC 102", "Professional Ethics"),
            ],
            "blockchain": _Y1_S2_CS + [
                ("CHB 101", "Engineering Chemistry"),
                ("MAC 102", "Professional Ethics"),
            ],
            "aiads": _Y1_S2_CS + [
                ("PYB 101", "Engineering Physics"),
                ("MAC 102", "Professional Ethics"),
            ],
            "it": _Y1_S2_CS + [
                ("CHB 101", "Engineering Chemistry"),
                ("MAC 102", "Professional Ethics"),
            ],
            "cse-iot": _Y1_S2_CS[:4] + [
                ("HUB 101", "Communication Skills"),
                ("CHB 101", "Engineering Chemistry"),
                ("MAC 102", "Professional Ethics"),
            ],
            "ec": _Y1_COMMON + [
                ("ECB 101", "Electrical Engineering"),
                ("ECB 102", "Electrical Machines"),
                ("MAC 102", "Professional Ethics"),
            ],
            "ee": _Y1_COMMON + [
                ("EEB 101", "Electrical Engineering"),
                ("EEB 102", "Electrical Machines"),
                ("MAC 102", "Professional Ethics"),
            ],
            "ei": _Y1_COMMON + [
                ("EIB 101", "Electrical Engineering"),
                ("EIB 102", "Electrical Machines"),
                ("MAC 102", "Professional Ethics"),
            ],
            "me": [
                ("MEB 103", "Thermodynamics"),
                ("MEB 104", "Material Science"),
                ("MAB 102", "Engineering Mathematics II"),
                ("HUB 101", "Communication Skills"),
                ("CHB 101", "Environmental Science"),
                ("PYB 101", "Applied Physics"),
                ("MAC 102", "Professional Ethics"),
            ],
            "ce": [
                ("CEB 103", "Surveying"),
                ("CEB 104", "Building Materials"),
                ("MAB 102", "Engineering Mathematics II"),
                ("HUB 101", "Communication Skills"),
                ("CHB 101", "Environmental Science"),
                ("PYB 101", "Applied Physics"),
                ("MAC 102", "Professional Ethics"),
            ],
        },
    },
    2: {
        3: {
            "cse": _Y2_S3_CS + [("MAB 201", "Discrete Mathematics")],
            "cse-iot": _Y2_S3_CS + [("IOB 201", "IoT Architecture")],
            "me": [
                ("MEB 201", "Fluid Mechanics"),
                ("MEB 202", "Manufacturing Processes"),
                ("MEB 203", "Machine Design"),
                ("MEB 204", "Heat Transfer"),
                ("MAB 201", "Engineering Mathematics III"),
            ],
        },
        4: {
            "cse": _Y2_S4_CS + [
                ("CSB 207", "Artificial Intelligence"),
                ("CSB 208", "Web Technologies"),
                ("MAB 202", "Probability & Statistics"),
            ],
            "cse-iot": _Y2_S4_CS + [
                ("IOB 202", "IoT Protocols"),
                ("IOB 203", "Embedded Systems"),
                ("MAB 202", "Probability & Statistics"),
            ],
            "me": [
                ("MEB 205", "Dynamics of Machinery"),
                ("MEB 206", "Industrial Engineering"),
                ("MEB 207", "Mechanical Measurements"),
                ("MEB 208", "Automobile Engineering"),
                ("MAB 202", "Probability & Statistics"),
            ],
        },
    },
    3: {
        5: {
            "cse": [
                ("CSC 301", "Machine Learning"),
                ("CSC 302", "Cloud Computing"),
                ("CSC 303", "Cybersecurity"),
                ("CSC 304", "Mobile App Development"),
                ("CSC 305", "Data Mining"),
            ],
            "cse-iot": [
                ("CSC 301", "Machine Learning"),
                ("CSC 302", "Cloud Computing"),
                ("IOC 301", "IoT Security"),
                ("IOC 302", "Sensor Networks"),
                ("IOC 303", "Edge Computing"),
            ],
        },
        6: {
            "cse": [
                ("CSC 306", "Distributed Systems"),
                ("CSC 307", "Internet of Things"),
                ("CSC 308", "Big Data Analytics"),
                ("CSC 309", "Natural Language Processing"),
                ("CSC 310", "Computer Vision"),
            ],
            "cse-iot": [
                ("CSC 306", "Distributed Systems"),
                ("IOC 304", "IoT Applications"),
                ("IOC 305", "Smart Systems"),
                ("CSC 308", "Big Data Analytics"),
                ("IOC 306", "IoT Project"),
            ],
        },
    },
    4: {
        7: {
            "cse": [
                ("CSC 401", "Deep Learning"),
                ("CSC 402", "Quantum Computing"),
                ("CSC 403", "Blockchain Technology"),
                ("CSC 404", "AR/VR Technologies"),
                ("CSC 405", "Ethics in Computing"),
            ],
            "cse-iot": [
                ("CSC 401", "Deep Learning"),
                ("IOC 401", "Industrial IoT"),
                ("IOC 402", "IoT Analytics"),
                ("CSC 404", "AR/VR Technologies"),
                ("CSC 405", "Ethics in Computing"),
            ],
        },
        8: {
            "cse": [
                ("CSC 406", "Final Year Project"),
                ("CSC 407", "Industry Internship"),
                ("CSC 408", "Technical Communication"),
                ("CSC 409", "Entrepreneurship"),
                ("CSC 410", "Emerging Technologies"),
            ],
            "cse-iot": [
                ("CSC 406", "Final Year Project"),
                ("CSC 407", "Industry Internship"),
                ("CSC 408", "Technical Communication"),
                ("CSC 409", "Entrepreneurship"),
                ("IOC 403", "IoT Capstone Project"),
            ],
        },
    },
}

_DRIVE_VIEW = "https://drive.google.com/file/d/{}/preview"
_DRIVE_DOWNLOAD = "https://drive.google.com/uc?export=download&id={}"


def _drive(file_id: str, **extra):
    entry = {"url": _DRIVE_VIEW.format(file_id), "download_url": _DRIVE_DOWNLOAD.format(file_id)}
    entry.update(extra)
    return entry


# subject code -> material type -> declared files
SUBJECT_MATERIALS = {
    "CSA 103": {
        "assignments": [
            _drive(
                "1VeDVrKDbXBtDoVY8QXdiylt1FxEevid7lOg05NnMgw4",
                id="ds_assignment1",
                name="Assignment 1 - Array Implementation",
                type="pdf",
                upload_date="2025-01-15",
                size="1.2 MB",
            ),
        ],
        "practicals": [
            _drive(
                "1VeDVrKDbXBtDoVY8QXdiylt1FxEevid7lOg05NnMgw4",
                id="ds_practical1",
                name="Lab 1 - Stack and Queue Implementation",
                type="image",
                upload_date="2025-01-10",
                size="754 KB",
            ),
        ],
        "labwork": [
            _drive(
                "1YHvo8DpFaSeAPVYbG2AnSXZBv5TVXVOT",
                id="ds_labwork1",
                name="DSA Experiments",
                type="doc",
                upload_date="2025-01-15",
                size="797 KB",
            ),
            _drive(
                "1nhPVlI2EwPU6m-tRuS0WJuDW1_vwNtu3",
                id="ds_labwork2",
                name="DSA Experiments solutions",
                type="zip",
                upload_date="2025-02-10",
                size="153 KB",
            ),
        ],
        # legacy capitalised key, normalised by Catalog
        "Syllabus": [
            _drive(
                "1SmdONnxM4Q7NXgknn180zfk868jdELzu",
                id="ds_syllabus",
                name="Syllabus - Data Structures And Algorithms",
                type="doc",
                upload_date="2025-01-15",
                size="733 KB",
            ),
        ],
        "pyq": [
            _drive(
                "1VeDVrKDbXBtDoVY8QXdiylt1FxEevid7lOg05NnMgw4",
                id="ds_pyq1",
                name="PYQ 2024",
                type="doc",
                upload_date="2025-01-15",
                size="1.2 MB",
            ),
        ],
    },
}
