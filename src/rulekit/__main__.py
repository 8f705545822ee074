from rulekit.cli import app

app(prog_name="rulekit")
