# yearning-notify

Notification channels and approval-workflow helpers for a SQL audit and
order-approval platform. It uses nothing beyond the standard library.

## What it provides

- `yearning_notify.messagex`: the channel-neutral `Message` dataclass with its
  `Target`, `File`, `Param`, `AppInfo` and `Source` parts, and the
  `MessageType` enum.
- `yearning_notify.ding`: DingTalk custom robot messages. `build_payload`
  builds the JSON body, `build_at` the mention block, `sign` appends a
  millisecond timestamp and an HMAC-SHA256 signature to a URL, and `send`
  posts the message. An empty `DingConfig.url` (or `"ding"`) selects the
  public robot endpoint with `token` as access token.
- `yearning_notify.qywx`: WeCom group robot messages. `build_payload` fills
  text, markdown or `text_notice` template-card bodies; other kinds carry only
  their `msgtype`. An empty `QywxConfig.url` (or `"qywx"`) selects the public
  endpoint with `token` as key.
- `yearning_notify.mail_message`: `MailMessage` composition with To/Cc/Bcc,
  custom headers, attachments and inline parts; `to_bytes` renders the MIME
  text, `recipients` lists bare addresses. `new_message` and
  `new_html_message` create plain-text and HTML messages.
- `yearning_notify.mailer`: SMTP delivery. `send_mail` uses implicit TLS on
  port 465 or when `MailerConfig.ssl` is set, upgrades with STARTTLS when the
  server offers it, and logs in when it offers AUTH. `send` delivers a
  `Message` to its `target.emails`.
- `yearning_notify.webhook`: `send` issues an HTTP request (POST by default)
  and raises `WebhookError` for any status other than 200.
- `yearning_notify.response`: the `Resp` envelope (`payload`, `code`,
  `text`), `success_payload`, `success_message` and the error constructors,
  plus `collect_rows` for arranging database or table names.
- `yearning_notify.filters`: an immutable `Query` of WHERE conditions and the
  `according_to_*` scopes that add them; `where_sql` renders SQL text and a
  flat parameter list.
- `yearning_notify.forms`: request forms such as `PageInfo`, `Search`,
  `ExecuteStr`, `SQLTest` and `QueryOrder`, read from decoded JSON with
  `from_dict` (which raises `ValueError` on wrongly typed fields).
- `yearning_notify.workflow`: workflow `Step` lists (`parse_steps`,
  `dump_steps`), `template_auditors`, `check_audit` (raises `AuditError` when a
  user may not approve an order), `next_performer`, `agree_message` and
  `truncate_sql`.
- `yearning_notify.dashboard`: the `GroupBy` statistics row and `time_add`.
- `yearning_notify.stringx`: `coalesce`, the first non-empty string.

## What it does not do

There is no web server, no command-line entry point, no database layer and no
LDAP login here. The filters produce SQL text and parameters but never run
them; the workflow helpers decide whether an action is allowed but store
nothing.

## Install

```
pip install .
pip install ".[test]"
```

## Examples

Send a DingTalk text message:

```python
from yearning_notify.ding import DingConfig, send
from yearning_notify.messagex import Message, Target

config = DingConfig(token="token", secret="secret")
send(config, Message(body="Order 42 is waiting for review", target=Target(all=True)))
```

Compose a mail and look at the bytes that would be sent:

```python
from datetime import datetime, timezone
from yearning_notify.mail_message import new_html_message

msg = new_html_message("Order approved", "<p>done</p>")
msg.add_to("Ops", "ops@example.com")
msg.attach_buffer("report.txt", b"rows: 3", False)
print(msg.recipients())          # ['ops@example.com']
print(msg.to_bytes(datetime.now(timezone.utc)).decode())
```

Build a filter:

```python
from yearning_notify.filters import Query, according_to_order_state, according_to_username

sql, params = Query().scopes(
    according_to_username("bob"), according_to_order_state()
).where_sql()
# sql == "(username like ?) AND (`status` in (?, ?))", params == ["%bob%", 1, 4]
```

Check whether a user may approve the current step of an order:

```python
from yearning_notify.workflow import AuditError, check_audit, parse_steps

steps = parse_steps('[{"desc": "submit", "type": 0, "auditor": ["submitter"]},'
                    ' {"desc": "review", "type": 1, "auditor": ["admin"]}]')
try:
    last = check_audit(steps, 1, 2, "alice", "admin")   # True: agreeing executes
except AuditError as exc:
    print(exc)
```

## Tests

```
pytest
```