from datetime import date, datetime
from sqlalchemy.orm import validates
from ..extensions import db


class Expense(db.Model):
    __tablename__ = "expenses"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    date = db.Column(db.Date, default=date.today, nullable=False, index=True)
    time_period = db.Column(db.String(20), nullable=False)  # morning/midday/afternoon/evening
    item_name = db.Column(db.String(200), nullable=False)
    amount = db.Column(db.Float, nullable=False)
    payment_method = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint("amount > 0", name="ck_expense_amount_positive"),
    )

    @validates("user_id")
    def _owner_is_immutable(self, key, value):
        if self.user_id is not None and value != self.user_id:
            raise ValueError("Expense owner cannot be changed")
        return value

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "time_period": self.time_period,
            "item_name": self.item_name,
            "amount": round(float(self.amount), 2),
            "payment_method": self.payment_method,
        }

    def __repr__(self):
        return f"<Expense {self.id} {self.date} {self.item_name!r} {self.amount}>"
