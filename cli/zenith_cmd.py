"""
CLI 命令：zenith
习惯打卡、每日记录与统计的命令行入口
"""
import sys
from pathlib import Path

import click

# 添加项目根目录到 sys.path，以便导入 core 模块
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from core.backup import (
    cleanup_old_backups,
    create_backup,
    export_filename,
    list_backups,
    load_backup,
    write_export,
)
from core.constants import SMART_SUGGESTIONS
from core.exceptions import ZenithError
from core.habit_progress import habit_target
from core.models import HabitCategory, Mood
from core.statistics import (
    achievements,
    average_sleep_hours,
    average_water_intake,
    category_balance,
    current_streak,
    daily_completion_ratio,
    profile_summary,
    quote_of_the_day,
)
from core.store import get_store

CATEGORY_CHOICES = click.Choice([c.value for c in HabitCategory])
MOOD_CHOICES = click.Choice([m.value for m in Mood])


def _fail(error: ZenithError) -> None:
    click.echo(f"❌ {error.get_user_message()}", err=True)
    sys.exit(1)


@click.group()
def zenith():
    """Zenith 习惯与身心记录"""
    pass


@zenith.command()
def habits():
    """列出全部习惯及今日状态"""
    store = get_store()
    today = store.today()
    progress = store.today_log().habit_progress
    all_habits = store.habits
    if not all_habits:
        click.echo("ℹ️ 还没有习惯，使用 'zenith add' 创建")
        return

    for h in all_habits:
        mark = "✅" if today in h.completed_dates else "⬜"
        target = habit_target(h)
        value = progress.get(h.id, 0)
        streak = current_streak(h, today)
        click.echo(f"{mark} {h.icon} {h.name} [{h.category.value}] {value}/{target}  🔥{streak}  ({h.id})")


@zenith.command()
@click.argument("name")
@click.option("--category", "-c", type=CATEGORY_CHOICES, default=HabitCategory.SELF_CARE.value)
@click.option("--icon", "-i", default=None)
@click.option("--goal", "-g", default=None, help='e.g. "10 pages"')
@click.option("--reminder", "-r", default=None, help="HH:MM, stored only")
def add(name, category, icon, goal, reminder):
    """创建新习惯"""
    try:
        habit = get_store().create_habit(name, category, icon, goal, reminder)
    except ZenithError as e:
        _fail(e)
        return
    click.echo(f"✅ 已创建: {habit.icon} {habit.name} ({habit.id})")


@zenith.command()
@click.argument("habit_id")
@click.option("--name", default=None)
@click.option("--category", type=CATEGORY_CHOICES, default=None)
@click.option("--icon", default=None)
@click.option("--goal", default=None)
@click.option("--reminder", default=None)
def edit(habit_id, name, category, icon, goal, reminder):
    """修改习惯名称、类别、图标、目标或提醒时间"""
    fields = {
        "name": name,
        "category": category,
        "icon": icon,
        "goal": goal,
        "reminder_time": reminder,
    }
    fields = {k: v for k, v in fields.items() if v is not None}
    try:
        habit = get_store().edit_habit(habit_id, **fields)
    except ZenithError as e:
        _fail(e)
        return
    if habit is None:
        click.echo(f"⚪ 未找到习惯: {habit_id}")
        return
    click.echo(f"✅ 已更新: {habit.icon} {habit.name}")


@zenith.command()
@click.argument("habit_id")
def delete(habit_id):
    """删除习惯（历史记录保留）"""
    try:
        deleted = get_store().delete_habit(habit_id)
    except ZenithError as e:
        _fail(e)
        return
    if deleted:
        click.echo(f"🗑️ 已删除: {habit_id}")
    else:
        click.echo(f"⚪ 未找到习惯: {habit_id}")


@zenith.command()
@click.argument("habit_id")
def done(habit_id):
    """标记今日完成"""
    try:
        habit = get_store().toggle_habit(habit_id, True)
    except ZenithError as e:
        _fail(e)
        return
    if habit is None:
        click.echo(f"⚪ 未找到习惯: {habit_id}")
        return
    click.echo(f"✅ {habit.name} 今日已完成")


@zenith.command()
@click.argument("habit_id")
def undo(habit_id):
    """取消今日完成"""
    try:
        habit = get_store().toggle_habit(habit_id, False)
    except ZenithError as e:
        _fail(e)
        return
    if habit is None:
        click.echo(f"⚪ 未找到习惯: {habit_id}")
        return
    click.echo(f"↩️ {habit.name} 已取消今日完成")


@zenith.command()
@click.argument("habit_id")
@click.argument("value", type=float)
def progress(habit_id, value):
    """记录今日数值进度（自动限制在 0 与目标之间）"""
    store = get_store()
    try:
        habit = store.set_habit_progress(habit_id, value)
    except ZenithError as e:
        _fail(e)
        return
    if habit is None:
        click.echo(f"⚪ 未找到习惯: {habit_id}")
        return
    recorded = store.today_log().habit_progress.get(habit.id, 0)
    state = "✅ 已完成" if store.today() in habit.completed_dates else "⏳ 进行中"
    click.echo(f"{habit.name}: {recorded}/{habit_target(habit)} {state}")


@zenith.command()
@click.option("--mood", type=MOOD_CHOICES, default=None)
@click.option("--stress", type=int, default=None, help="0-10")
@click.option("--water", type=int, default=None, help="cups")
@click.option("--sleep", type=int, default=None, help="hours")
@click.option("--exercise", type=int, default=None, help="minutes")
@click.option("--journal", default=None)
def log(mood, stress, water, sleep, exercise, journal):
    """记录今日身心状态，不带参数时显示今日记录"""
    fields = {
        "mood": mood,
        "stressLevel": stress,
        "waterIntake": water,
        "sleepHours": sleep,
        "exerciseMinutes": exercise,
        "journal": journal,
    }
    fields = {k: v for k, v in fields.items() if v is not None}
    store = get_store()
    try:
        today_log = store.update_today_log(fields) if fields else store.today_log()
    except ZenithError as e:
        _fail(e)
        return

    mood_text = f"{today_log.mood.emoji} {today_log.mood.value}" if today_log.mood else "-"
    click.echo(f"📅 {today_log.date}")
    click.echo(f"  心情: {mood_text}")
    click.echo(f"  压力: {today_log.stress_level}/10")
    click.echo(f"  饮水: {today_log.water_intake} 杯")
    click.echo(f"  睡眠: {today_log.sleep_hours} 小时")
    click.echo(f"  运动: {today_log.exercise_minutes} 分钟")
    if today_log.journal:
        click.echo(f"  日记: {today_log.journal}")


@zenith.command()
def stats():
    """显示今日进度、7 天平衡与成就"""
    store = get_store()
    all_habits, logs = store.habits, store.logs
    today = store.today()

    ratio = daily_completion_ratio(all_habits, today)
    profile = profile_summary(all_habits, today)
    click.echo(f"💬 {quote_of_the_day(today)}")
    click.echo(f"\n📊 今日进度: {round(ratio * 100)}%")
    click.echo(f"🔥 连续打卡: {profile['streak']} 天 | 累计完成: {profile['totalCheckIns']}")
    click.echo(f"💧 平均饮水: {average_water_intake(logs):.1f} 杯 | 😴 平均睡眠: {average_sleep_hours(logs):.1f} 小时")

    click.echo("\n[7 天类别平衡]")
    for entry in category_balance(all_habits, today):
        click.echo(f"  {entry['category']}: {entry['value']:.0f}%")

    click.echo("\n[成就]")
    for badge in achievements(all_habits, logs):
        mark = badge.icon if badge.unlocked else "🔒"
        click.echo(f"  {mark} {badge.title} - {badge.description}")


@zenith.command()
def suggest():
    """列出推荐习惯，使用 'zenith adopt <序号>' 采用"""
    for i, s in enumerate(SMART_SUGGESTIONS):
        click.echo(f"  [{i}] {s['icon']} {s['name']} ({s['category'].value}, {s['goal']})")


@zenith.command()
@click.argument("index", type=int)
def adopt(index):
    """采用一条推荐习惯"""
    try:
        habit = get_store().apply_suggestion(index)
    except ZenithError as e:
        _fail(e)
        return
    click.echo(f"✅ 已创建: {habit.icon} {habit.name} ({habit.id})")


@zenith.command(name="export")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--backup-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Write a dated backup into this directory instead")
def export_cmd(output, backup_dir):
    """导出全部数据为 JSON"""
    store = get_store()
    try:
        if backup_dir is not None:
            path = create_backup(store.habits, store.logs, directory=backup_dir, today=store.today())
            removed = cleanup_old_backups(directory=backup_dir)
            click.echo(f"📁 备份已写入: {path}")
            if removed:
                click.echo(f"🧹 已清理 {removed} 个过期备份")
            return
        path = write_export(store.habits, store.logs, output or Path(export_filename(store.today())))
    except ZenithError as e:
        _fail(e)
        return
    click.echo(f"📁 已导出: {path}")


@zenith.command()
@click.option("--backup-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
def backups(backup_dir):
    """列出已有备份（最新在前）"""
    try:
        entries = list_backups(backup_dir)
    except ZenithError as e:
        _fail(e)
        return
    if not entries:
        click.echo("ℹ️ 还没有备份，使用 'zenith export --backup-dir <目录>' 创建")
        return
    for entry in entries:
        click.echo(
            f"  {entry['filename']}  {entry['habit_count']} 习惯 / {entry['log_count']} 记录  ({entry['path']})"
        )


@zenith.command(name="import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.confirmation_option(prompt="⚠️ 导入会完全替换当前所有数据，确认继续？")
def import_cmd(source):
    """从备份文件恢复（整体替换，不合并）"""
    try:
        new_habits, logs = load_backup(source)
        get_store().import_bulk(new_habits, logs)
    except ZenithError as e:
        _fail(e)
        return
    click.echo(f"✅ 已恢复 {len(new_habits)} 个习惯与 {len(logs)} 条记录")


@zenith.command()
@click.confirmation_option(prompt="⚠️ 这将永久删除所有数据并恢复默认习惯，确认？")
def reset():
    """清空所有数据并恢复默认习惯"""
    try:
        get_store().reset_all()
    except ZenithError as e:
        _fail(e)
        return
    click.echo("✅ 已重置为默认习惯")


if __name__ == "__main__":
    zenith()
