from __future__ import annotations

from typing import Any

from jinja2 import Environment, select_autoescape

from cvdesk.models.cv_record import CVRecord


_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))

CV_TEMPLATE = _env.from_string(
    """
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>CV - {{ full_name }}</title>
  <style>
    body { font-family: Arial, sans-serif; margin: 40px; color: #222; }
    h1 { color: rgb(0, 0, 83); margin-bottom: 4px; }
    h2 { border-bottom: 2px solid rgb(0, 0, 83); padding-bottom: 4px; margin-top: 28px; }
    .entry { margin-bottom: 10px; padding: 10px; border-left: 3px solid rgb(0, 0, 83); }
    .muted { color: #666; }
  </style>
</head>
<body>
  <h1>{{ full_name }}</h1>
  <div class="muted">{{ record.position }}{% if record.role_title %} - {{ record.role_title }}{% endif %}</div>
  <div class="muted">{{ record.email }}{% if record.phone %} | {{ record.phone }}{% endif %}</div>

  <h2>Profile</h2>
  <p>Department: {{ record.department or "-" }}</p>
  <p>Experience: {{ record.experience if record.experience is not none else 0 }} years{% if record.experience_in_similar_role is not none %} ({{ record.experience_in_similar_role }} in a similar role){% endif %}</p>
  {% if record.sap_k_level %}<p>SAP K-Level: {{ record.sap_k_level }}</p>{% endif %}
  {% if record.languages %}<p>Languages: {{ record.languages }}</p>{% endif %}

  {% if work_experiences %}
  <h2>Work Experience</h2>
  {% for exp in work_experiences %}
  <div class="entry">
    <strong>{{ exp.position or "Position" }}</strong> at {{ exp.company_name or "Company" }}<br>
    <small class="muted">{{ exp.start_date or "" }} - {{ "Present" if exp.is_current_role else (exp.end_date or "") }}</small>
    {% if exp.role_title %}<br><em>{{ exp.role_title }}</em>{% endif %}
  </div>
  {% endfor %}
  {% endif %}

  <h2>Qualifications</h2>
  {% if record.qualification_name %}<p>{{ record.qualification_name }}{% if record.institute_name %}, {{ record.institute_name }}{% endif %}{% if record.year_completed %} ({{ record.year_completed }}){% endif %}</p>{% endif %}
  {% if record.qualifications %}<p>{{ record.qualifications }}</p>{% endif %}

  {% if certificates %}
  <h2>Certificates</h2>
  {% for cert in certificates %}
  <div class="entry"><strong>{{ cert.certificate_name }}</strong><br><small class="muted">{{ cert.department }} - {{ cert.role }}</small></div>
  {% endfor %}
  {% endif %}

  {% if record.skills %}
  <h2>Skills</h2>
  <p>{{ record.skills }}</p>
  {% endif %}
</body>
</html>
    """.strip()
)


def render_cv_document(record: CVRecord) -> str:
    context: dict[str, Any] = {
        "record": record,
        "full_name": " ".join(part for part in (record.name, record.surname) if part),
        "work_experiences": record.work_experiences or [],
        "certificates": record.certificate_types or [],
    }
    return CV_TEMPLATE.render(**context)


def document_filename(record: CVRecord) -> str:
    return f"CV_{'_'.join(record.name.split())}_{record.id}.html"
