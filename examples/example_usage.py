"""Ví dụ: dùng service layer trực tiếp, không cần HTTP.

Chạy với một database đã có dữ liệu: in báo cáo tuần của user 1, duyệt
một loạt yêu cầu đang chờ, rồi xem hoạt động trong tuần.
"""

from datetime import date

from src.timeclock.timeclock.main import create_container


def main():
    container = create_container()

    for row in container.report_service.build_weekly_report(
        user_id=1, start=date(2024, 1, 1), end=date(2024, 1, 31)
    ):
        print(row.to_ui())

    result = container.approval_service.bulk_transition(
        keys=["permission:1", "incident:2"],
        action="approve",
        approver_id=1,
        comment="OK",
    )
    print("changed:", [r.key for r in result.changed])
    print("skipped:", [(s.key, s.reason) for s in result.skipped])

    feed = container.activity_service.list_activity(period="week", per_page=5)
    print("activity:", feed["total"], [i["employee"] for i in feed["items"]])


if __name__ == "__main__":
    main()
