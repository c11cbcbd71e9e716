from __future__ import annotations

from html import escape


def wrap_in_template(app_name: str, title: str, content: str) -> str:
    app = escape(app_name)
    return f"""
  <!DOCTYPE html>
  <html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
  </head>
  <body style="margin:0;padding:0;font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,sans-serif;background-color:#f4f4f5;">
    <table width="100%" cellpadding="0" cellspacing="0" style="max-width:600px;margin:0 auto;background:#ffffff;">
      <tr>
        <td style="background:#1d4ed8;padding:24px 32px;">
          <h1 style="color:#ffffff;margin:0;font-size:20px;">{app}</h1>
        </td>
      </tr>
      <tr>
        <td style="padding:32px;">{content}</td>
      </tr>
      <tr>
        <td style="padding:16px 32px;background:#f8fafc;border-top:1px solid #e2e8f0;font-size:12px;color:#94a3b8;text-align:center;">
          This is an automated message from {app}. Please do not reply to this email.
        </td>
      </tr>
    </table>
  </body>
  </html>"""


def _row(label: str, value: str) -> str:
    return (
        f'<tr><td style="padding:8px;color:#64748b;width:40%;">{escape(label)}</td>'
        f'<td style="padding:8px;color:#1e293b;font-weight:600;">{escape(value)}</td></tr>'
    )


def dashboard_url(app_url: str) -> str:
    return app_url.rstrip("/") + "/dashboard"


def _button(href: str, label: str, colour: str) -> str:
    return (
        f'<a href="{escape(href, quote=True)}" '
        f'style="display:inline-block;background:{colour};color:#fff;padding:12px 24px;border-radius:8px;'
        f'text-decoration:none;font-weight:600;margin-top:8px;">{escape(label)}</a>'
    )


def movement_alert_email(
    *,
    employee_name: str,
    employee_email: str,
    heading: str,
    check_in_time: str,
    check_in_address: str,
    current_address: str,
    distance: str,
    map_url: str,
) -> str:
    rows = "".join(
        [
            _row("Employee", f"{employee_name} ({employee_email})"),
            _row("Checked in at", check_in_time),
            _row("Check-in location", check_in_address),
            _row("Current location", current_address),
            _row("Distance moved", distance),
        ]
    )
    return f"""
    <h2 style="color:#b45309;margin:0 0 16px;">{escape(heading)}</h2>
    <p style="color:#475569;line-height:1.6;">
      <strong>{escape(employee_name)}</strong> is {escape(distance)} away from the location where they checked in today.
    </p>
    <table style="width:100%;border-collapse:collapse;margin:16px 0;">{rows}</table>
    <a href="{escape(map_url, quote=True)}" style="display:inline-block;background:#3b82f6;color:#fff;padding:10px 20px;border-radius:6px;text-decoration:none;">
      View on map
    </a>
  """


def check_in_reminder_email(
    *, employee_name: str, shift_name: str, shift_start: str, day_label: str, link: str
) -> str:
    return f"""
    <h2 style="color:#1e293b;margin:0 0 16px;">Check-In Reminder</h2>
    <p style="color:#475569;line-height:1.6;">Hi {escape(employee_name)},</p>
    <p style="color:#475569;line-height:1.6;">
      You have not checked in yet for <strong>{escape(day_label)}</strong>.
      Your {escape(shift_name)} shift started at <strong>{escape(shift_start)}</strong>.
    </p>
    {_button(link, "Check In Now", "#3b82f6")}
  """


def check_out_reminder_email(
    *, employee_name: str, shift_name: str, shift_end: str, day_label: str, link: str
) -> str:
    return f"""
    <h2 style="color:#1e293b;margin:0 0 16px;">Check-Out Reminder</h2>
    <p style="color:#475569;line-height:1.6;">Hi {escape(employee_name)},</p>
    <p style="color:#475569;line-height:1.6;">
      You are still checked in for <strong>{escape(day_label)}</strong>.
      Your {escape(shift_name)} shift ended at <strong>{escape(shift_end)}</strong>. Please remember to check out.
    </p>
    {_button(link, "Check Out Now", "#f59e0b")}
  """
