"""Bilingual boilerplate printed in the inspection report.

Each entry is an ``(english, arabic)`` pair; the layout puts the English
text in the left column and the Arabic text right-aligned beside it.
"""

from __future__ import annotations

REPORT_TITLE = ("PROPERTY INSPECTION REPORT", "تقرير فحص العقار")
HEADER_SUBTITLE = "Property Inspection Report - تقرير فحص العقار"
INVOICE_TITLE = ("INVOICE", "فاتورة")

SECTION_PROPERTY = ("PROPERTY INFORMATION", "معلومات العقار")
SECTION_OVERVIEW = ("OVERVIEW & DISCLAIMER", "نظرة عامة وإخلاء المسؤولية")
SECTION_NOTICES = ("IMPORTANT NOTICES", "ملاحظات مهمة")
SECTION_SCOPE = ("SCOPE OF THE INSPECTION", "نطاق الفحص")
SECTION_CONFIDENTIALITY = ("CONFIDENTIALITY", "سرية التقرير")
SECTION_AI_SUMMARY = ("EXECUTIVE SUMMARY", "الملخص التنفيذي")
SECTION_FINDINGS = ("INSPECTION FINDINGS", "نتائج الفحص")
SECTION_PHOTOS = ("INSPECTION PHOTOS", "صور الفحص")
SECTION_SUMMARY = ("INSPECTION SUMMARY", "ملخص الفحص")
SECTION_SIGNATURES = ("SIGNATURES", "التوقيعات")

LABELS = {
    "client": ("Client Name", "اسم العميل"),
    "location": ("Property Location", "الموقع"),
    "property_type": ("Property Type", "نوع العقار"),
    "inspector": ("Inspector", "المفتش"),
    "date": ("Inspection Date", "تاريخ الفحص"),
    "report_id": ("Report ID", "رقم التقرير"),
    "total": ("Total Items Inspected", "إجمالي البنود المفحوصة"),
    "pass": ("Pass", "ناجح"),
    "fail": ("Fail", "فاشل"),
    "na": ("N/A", "غير منطبق"),
    "pass_rate": ("Overall Pass Rate", "نسبة النجاح"),
    "signature": ("Signature", "التوقيع"),
    "prepared_by": ("Prepared by", "أعد بواسطة"),
    "stamp": ("Stamp", "الختم"),
    "signed_on": ("Date", "التاريخ"),
}

GREETING = ("Dear {client},", "السادة {client} المحترمون،")

OVERVIEW = [
    (
        "Thank you for choosing Wasla Real Estate Solutions to carry out the inspection of your property.",
        "نشكر لكم اختياركم \"وصلة للحلول العقارية\" للقيام بفحص العقار الخاص بكم.",
    ),
    (
        "This report presents the inspection findings and measurements as documented on site on the "
        "date of the visit, and the presence of certain observations is common in property inspections.",
        "يُقدم هذا التقرير نتائج الفحص والقياسات كما تم توثيقها ميدانيًا في تاريخ الزيارة، "
        "ووجود بعض الملاحظات يُعد أمر شائع في عمليات الفحص العقاري.",
    ),
    (
        "Please review the attached report carefully before making your final decision. If you require "
        "any further clarification regarding the condition of the property, please feel free to contact us.",
        "يرجى مراجعة التقرير المرفق بعناية قبل اتخاذ قراركم النهائي، وإذا كنتم بحاجة إلى توضيحات "
        "إضافية حول حالة العقار، فلا تترددوا بالتواصل معنا.",
    ),
]

CONTACT = ("Contact", "للتواصل")
CONTACT_EMAIL = ("Email", "البريد الإلكتروني")
CONTACT_PHONE = ("Mobile", "الهاتف")

NOTICES = [
    (
        "No property is perfect / لا يوجد عقار مثالي",
        "Every building has imperfections or items that are ready for maintenance. It's the inspector's "
        "task to discover and report these so you can make informed decisions. This report should not be "
        "used as a tool to demean property, but rather a way to illuminate the realities of the property."
        "\n\nكل عقار يحتوي على بعض العيوب أو الأجزاء التي تحتاج إلى صيانة. دور المفتش هو تحديد هذه النقاط "
        "وتقديمها بوضوح لمساعدتكم في اتخاذ قرارات مستنيرة.",
    ),
    (
        "This report is not an appraisal / هذا التقرير ليس تقييمًا سعريًا",
        "Home inspectors focus on the interests of the prospective buyer; their findings can help buyers "
        "understand the true costs of ownership."
        "\n\nفاحص العقار يركز على مصلحة المشتري المحتمل. نتائج الفحص تساعد المشتري في فهم التكاليف "
        "الحقيقية لامتلاك العقار.",
    ),
    (
        "Maintenance costs are normal / تكاليف الصيانة أمر طبيعي",
        "Homeowners should plan to spend around 1% of the total value of a property in maintenance "
        "costs, annually."
        "\n\nينبغي على مالكي العقارات تخصيص ما يُعادل 1% من قيمة العقار سنويًا لأعمال الصيانة الدورية.",
    ),
]

SCOPE = [
    (
        "This report details the outcome of a visual survey of the property detailed in the annexed "
        "inspection checklist in order to check the quality of workmanship against applicable standards. "
        "It covers both the interior and exterior of the property as well as garden, driveway and garage "
        "if relevant.",
        "يوضح هذا التقرير نتيجة الفحص البصري للعقار كما هو مفصل في قائمة الفحص المرفقة، بهدف تقييم جودة "
        "التنفيذ مقارنة بالمعايير المعتمدة. يشمل الفحص المناطق الداخلية والخارجية.",
    ),
    (
        "Our opinion does not study the property value or the engineering of the structure rather it "
        "studies the functionality of the property.",
        "رأينا الفني لا يشمل تقييم القيمة السوقية أو التحليل الإنشائي، بل يركز على حالة العقار ووظائفه العامة.",
    ),
]

CONFIDENTIALITY = (
    "The inspection report is prepared for the Client for informing of the major deficiencies in the "
    "property condition and is solely for Client's own information."
    "\n\nتم إعداد تقرير الفحص هذا خصيصًا للعميل بغرض إعلامه بالنواقص الجوهرية في حالة العقار، "
    "وهو للاستخدام الشخصي فقط."
)

FINDINGS_HEADER = ["Category", "Inspection Point", "Status", "Notes", "Photo"]

ANNEX_NOTE = "Property Inspection report is annexed / مرفق تقرير الفحص العقاري"

INVOICE_CLOSING = "Thank you for your business! / !شكراً لتعاملكم معنا"


def pair(text: tuple[str, str], sep: str = " / ") -> str:
    """Join an English/Arabic pair on one line."""
    return f"{text[0]}{sep}{text[1]}"
