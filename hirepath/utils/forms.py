from wtforms import Field

from ..errors import ValidationError


class ListField(Field):
    """Accepts a JSON array or a comma separated string."""

    def process_formdata(self, valuelist):
        items = []
        for v in valuelist:
            if v is None:
                continue
            if isinstance(v, str):
                items.extend(p.strip() for p in v.split(",") if p.strip())
            else:
                items.append(v)
        self.data = items

    def _value(self):
        return ", ".join(str(v) for v in (self.data or []))


def validate_or_raise(form):
    if not form.validate_on_submit():
        raise ValidationError("Invalid request", form.errors)
    return form
