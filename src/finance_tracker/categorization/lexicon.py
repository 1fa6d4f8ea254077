"""Keyword lexicon and category presentation attributes.

The lexicon maps an expense category name to substrings that identify it in
a transaction description (merchant names, goods, fee types). Matching is
case-insensitive: keywords are lowercased once when the module loads and
descriptions are lowercased before matching.
"""

from dataclasses import dataclass

INCOME_COLOR = "#EF4444"
EXPENSE_COLOR = "#10B981"
DEFAULT_ICON = "📦"

_RAW_KEYWORDS: dict[str, tuple[str, ...]] = {
    "餐饮": (
        "餐厅", "饭店", "餐馆", "食堂", "外卖", "小吃", "火锅", "烧烤",
        "快餐", "早餐", "午餐", "晚餐", "饮品", "咖啡", "奶茶", "酒吧",
        "麦当劳", "肯德基", "必胜客", "星巴克", "汉堡王", "德克士",
        "华莱士", "真功夫", "吉野家", "味千拉面", "永和大王",
        "海底捞", "呷哺呷哺", "小肥羊", "大龙燚", "小龙坎", "蜀大侠",
        "巴奴毛肚火锅", "谭鸭血", "贤和庄", "德庄", "刘一手",
        "皇城老妈", "小天鹅", "秦妈火锅", "桥头火锅", "孔亮火锅",
        "周师兄", "朱光玉", "陈艳红", "楠火锅", "袁老四", "烤肉",
        "烤鱼", "烤串", "铁板烧", "烧腊", "卤味", "鸭脖", "鸭翅",
        "鸭掌", "鸭头", "鸡爪", "鸡翅", "鸡腿", "鸡排", "炸鸡", "烤鸭",
        "烧鸭", "白切鸡", "盐焗鸡", "黄焖鸡", "叫花鸡", "口水鸡",
        "烧鸡", "扒鸡", "熏鸡", "烤鸡", "鸡公煲", "鸡煲", "煲仔饭",
        "盖浇饭", "炒饭", "炒面", "汤面", "拌面", "拉面", "刀削面",
        "炸酱面", "热干面", "担担面", "臊子面", "油泼面", "烩面",
        "板面", "米线", "米粉", "河粉", "肠粉", "凉皮", "凉粉", "凉面",
        "冷面", "酸辣粉", "螺蛳粉", "桂林米粉", "过桥米线", "土豆粉",
        "地瓜粉", "粉丝", "粉条", "面条", "面食", "包子", "馒头",
        "花卷", "烧卖", "饺子", "馄饨", "汤圆", "元宵", "粽子", "月饼",
        "蛋糕", "面包", "饼干", "巧克力", "糖果", "果冻", "布丁",
        "冰淇淋", "雪糕", "冰棒", "酸奶", "牛奶", "豆浆", "茶", "果汁",
        "汽水", "可乐", "雪碧", "芬达", "美年达", "七喜", "脉动",
        "红牛", "东鹏特饮", "营养快线", "旺仔牛奶", "AD钙奶",
        "爽歪歪", "娃哈哈", "农夫山泉", "怡宝", "百岁山", "康师傅",
        "统一", "冰露", "昆仑山", "依云", "巴黎水", "气泡水",
        "苏打水", "矿泉水", "纯净水", "蒸馏水", "自来水", "白开水",
        "茶水", "饮料", "酒水", "酒精", "白酒", "啤酒", "红酒", "黄酒",
        "米酒", "葡萄酒", "香槟", "鸡尾酒", "伏特加", "威士忌",
        "白兰地", "朗姆酒", "龙舌兰", "金酒", "利口酒", "力娇酒",
        "清酒", "烧酒", "梅酒", "果酒", "药酒", "保健酒", "酒", "吃",
        "喝", "食品", "披萨", "美团",
    ),
    "交通": (
        "地铁", "公交", "出租车", "打车", "滴滴", "单车", "共享单车",
        "火车", "高铁", "飞机", "机票", "油费", "停车费", "过路费",
        "加油站", "高速", "路桥", "运输", "出行", "旅行", "旅游",
        "车票", "船票", "交通费", "通勤", "班车", "包车", "租车",
        "自驾", "汽车", "车辆", "车", "轨道交通", "城铁", "轻轨",
        "磁悬浮", "公共汽车", "巴士", "大巴", "中巴", "小巴", "的士",
        "计程车", "网约车", "优步", "曹操出行", "首汽约车",
        "高德打车", "美团打车", "哈啰出行", "T3出行", "阳光出行",
        "滴滴顺风车", "拼车", "共享自行车", "共享电动车", "ofo",
        "摩拜", "哈啰单车", "青桔单车", "美团单车", "滴滴单车",
        "小蓝单车", "优拜单车", "永安行", "公共自行车", "自行车",
        "电动车", "摩托车", "三轮车", "四轮车", "轿车", "SUV", "MPV",
        "跑车", "豪华车", "越野车", "卡车", "货车", "客车", "公交车",
        "自驾车", "私家车", "二手车", "新车", "汽车销售", "汽车维修",
        "汽车保养", "汽车美容", "洗车", "加油", "中石化", "中石油",
        "中海油", "壳牌", "BP", "埃克森美孚", "道达尔", "雪佛龙",
        "马拉松石油", "康菲石油", "汽油", "柴油", "煤油", "机油",
        "润滑油", "停车", "停车场", "车位", "停车位", "停车库",
        "高速公路", "过桥费", "过隧道费", "收费站", "ETC", "高速费",
        "路桥费", "交通罚款", "违章", "罚单", "扣分", "驾驶证",
        "行驶证", "车辆年检", "年审", "保险", "车险", "交强险",
        "商业险", "第三者责任险", "车损险", "盗抢险", "玻璃险",
        "划痕险", "自燃险", "涉水险", "不计免赔", "动车", "城际铁路",
        "普速列车", "绿皮车", "硬座", "硬卧", "软卧", "软座",
        "一等座", "二等座", "商务座", "无座", "站票", "火车票",
        "高铁票", "动车票", "列车", "车次", "车站", "火车站",
        "高铁站", "动车站", "机场", "飞机场", "航空", "航班",
        "登机牌", "行李", "托运", "安检", "登机", "起飞", "降落",
        "延误", "取消", "改签", "退票", "航空公司", "国航", "东航",
        "南航", "海航", "厦航", "上航", "深航", "山航", "川航",
        "春秋航空", "吉祥航空", "奥凯航空", "华夏航空", "西部航空",
        "北部湾航空", "成都航空", "多彩贵州航空", "福州航空",
        "桂林航空", "海南航空", "河北航空", "江西航空", "昆明航空",
        "兰州航空", "山东航空", "深圳航空", "四川航空", "天津航空",
        "乌鲁木齐航空", "西藏航空", "祥鹏航空", "浙江长龙航空",
        "中国国际航空", "中国东方航空", "中国南方航空",
        "中国海南航空", "船", "轮船", "客轮", "货轮", "游轮", "邮轮",
        "轮渡", "摆渡船", "快艇", "游艇", "帆船", "渔船", "货船",
        "客船", "码头", "港口", "轮渡票",
    ),
    "购物": (
        "超市", "商场", "商店", "便利店", "淘宝", "京东", "拼多多",
        "网购", "电商", "服装", "鞋子", "化妆品", "电子产品", "数码",
        "电器", "家具", "家居", "饰品", "首饰", "珠宝", "手表", "眼镜",
        "箱包", "皮具", "运动", "健身", "户外", "图书", "文具", "玩具",
        "礼品", "礼物", "鲜花", "蛋糕", "烘焙", "买", "购", "大卖场",
        "仓储超市", "会员店", "社区店", "生鲜超市", "食品超市",
        "生活用品超市", "家居超市", "电器超市", "服装超市",
        "鞋帽超市", "药店超市", "药房超市", "药品超市",
        "医疗用品超市", "图书超市", "蛋糕超市", "烘焙超市",
        "家电超市", "家具超市", "运动用品超市", "手机超市",
        "电脑超市", "相机超市",
    ),
    "教育": (
        "学校", "学费", "书本", "教材", "培训", "课程", "辅导班",
        "学习", "考试", "考证", "留学", "游学", "研学", "幼儿园",
        "小学", "中学", "大学", "研究生院", "博士", "硕士", "本科",
        "专科", "职业学校", "技校", "中专", "职高", "培训机构",
        "教育机构", "学习中心", "培训中心", "课程中心", "辅导中心",
        "补习班", "补课班", "兴趣班", "特长班", "艺术班", "音乐班",
        "美术班", "舞蹈班", "体育班", "奥数班", "英语班", "语文班",
        "数学班", "物理班", "化学班", "生物班", "历史班", "地理班",
        "政治班", "考试中心", "考点", "考场", "准考证", "成绩单",
        "毕业证", "学位证", "学历证", "资格证", "证书", "认证",
        "学院", "研究所", "研究院", "实验室", "图书馆", "书店",
        "书吧", "阅览室", "自习室",
    ),
    "娱乐": (
        "电影", "游戏", "KTV", "影院", "演出", "演唱会", "体育", "健身",
        "运动", "游泳", "瑜伽", "舞蹈", "音乐", "美术", "绘画", "书法",
        "摄影", "旅游", "旅行", "度假", "休闲", "电竞", "网吧", "网咖",
        "桌游", "剧本杀", "密室逃脱", "轰趴", "派对", "聚会", "酒吧",
        "夜店", "迪厅", "舞厅", "歌厅", "电影院", "戏院", "剧院",
        "剧场", "音乐厅", "歌剧院", "话剧院", "儿童剧院", "表演",
        "音乐会", "话剧", "歌剧", "舞剧", "音乐剧", "儿童剧", "杂技",
        "魔术", "马戏", "健美", "普拉提", "街舞", "爵士舞", "拉丁舞",
        "芭蕾舞", "民族舞", "现代舞", "肚皮舞", "钢管舞", "武术",
        "跆拳道", "拳击", "散打", "泰拳", "柔道", "摔跤", "击剑",
        "射箭", "射击", "跳水", "水球", "花样游泳", "田径", "马拉松",
        "短跑", "长跑", "中长跑", "跨栏", "跳远", "跳高", "三级跳远",
        "铅球", "铁饼", "标枪", "链球", "体操", "艺术体操",
        "竞技体操", "蹦床", "篮球", "足球", "排球", "乒乓球",
        "羽毛球", "网球", "棒球", "垒球", "橄榄球", "手球", "曲棍球",
        "冰球", "高尔夫球", "台球", "保龄球", "壁球", "板球", "马球",
        "藤球", "毽球", "门球", "沙狐球", "地掷球", "木球",
        "软式网球", "玩", "乐",
    ),
    "医疗": (
        "医院", "药店", "药品", "看病", "治疗", "体检", "医生", "护士",
        "诊所", "卫生室", "社区医院", "卫生院", "保健院", "防疫站",
        "疾控中心", "急救中心", "血站", "献血", "输血", "制药",
        "药房", "药铺", "药材", "中药", "西药", "中成药", "草药",
        "处方药", "非处方药", "OTC", "保健品", "营养品", "补品",
        "检查", "手术", "住院", "门诊", "急诊", "急救",
    ),
    "住房": (
        "房租", "水电费", "物业费", "宽带费", "燃气费", "水费",
        "电费", "煤气费", "暖气费", "管理费", "维修费", "装修",
        "装饰", "家具", "家居", "家电", "电器", "房产", "房地产",
        "开发商", "中介", "租房", "买房", "卖房", "房贷", "首付",
        "按揭", "抵押", "公积金", "房子", "公寓", "别墅", "住宅",
        "小区", "花园", "广场", "大厦", "写字楼", "办公楼", "商铺",
        "店面", "门面", "出租", "租赁", "租金", "押金", "中介费",
        "服务费", "保养费", "清洁费", "卫生费", "保安费", "停车费",
        "车位费", "网费", "电话费", "话费", "有线电视费", "收视费",
    ),
    "生活缴费": (
        "水费", "电费", "燃气费", "煤气费", "暖气费", "宽带费",
        "网费", "电话费", "话费", "有线电视费", "收视费", "物业费",
        "管理费", "维修费", "保养费", "清洁费", "卫生费", "保安费",
        "停车费", "车位费", "缴费", "交费", "付款", "支付", "账单",
        "费用", "收费",
    ),
    "其他": ("其他", "杂项", "未分类", "uncategorized"),
}


@dataclass(frozen=True)
class CategoryStyle:
    """Type, icon and color used when a category is created automatically."""

    type: str
    icon: str
    color: str


CATEGORY_STYLES: dict[str, CategoryStyle] = {
    # Income
    "工资": CategoryStyle("income", "💼", INCOME_COLOR),
    "奖金": CategoryStyle("income", "🏆", INCOME_COLOR),
    "投资": CategoryStyle("income", "📈", INCOME_COLOR),
    "兼职": CategoryStyle("income", "👔", INCOME_COLOR),
    "礼金": CategoryStyle("income", "🎁", INCOME_COLOR),
    "退款": CategoryStyle("income", "🔄", INCOME_COLOR),
    "红包": CategoryStyle("income", "🧧", INCOME_COLOR),
    "理财": CategoryStyle("income", "💹", INCOME_COLOR),
    "股息": CategoryStyle("income", "📊", INCOME_COLOR),
    "利息": CategoryStyle("income", "💰", INCOME_COLOR),
    "其他收入": CategoryStyle("income", "💰", INCOME_COLOR),
    # Expense
    "餐饮": CategoryStyle("expense", "🍜", EXPENSE_COLOR),
    "购物": CategoryStyle("expense", "🛒", EXPENSE_COLOR),
    "交通": CategoryStyle("expense", "🚗", EXPENSE_COLOR),
    "打车": CategoryStyle("expense", "🚖", EXPENSE_COLOR),
    "加油": CategoryStyle("expense", "⛽", EXPENSE_COLOR),
    "停车": CategoryStyle("expense", "🅿️", EXPENSE_COLOR),
    "公共交通": CategoryStyle("expense", "🚌", EXPENSE_COLOR),
    "高铁": CategoryStyle("expense", "🚄", EXPENSE_COLOR),
    "飞机": CategoryStyle("expense", "✈️", EXPENSE_COLOR),
    "娱乐": CategoryStyle("expense", "🎮", EXPENSE_COLOR),
    "电影": CategoryStyle("expense", "🎬", EXPENSE_COLOR),
    "游戏": CategoryStyle("expense", "🎯", EXPENSE_COLOR),
    "医疗": CategoryStyle("expense", "🏥", EXPENSE_COLOR),
    "药品": CategoryStyle("expense", "💊", EXPENSE_COLOR),
    "教育": CategoryStyle("expense", "📚", EXPENSE_COLOR),
    "学费": CategoryStyle("expense", "🎓", EXPENSE_COLOR),
    "书籍": CategoryStyle("expense", "📖", EXPENSE_COLOR),
    "住房": CategoryStyle("expense", "🏠", EXPENSE_COLOR),
    "房租": CategoryStyle("expense", "🏡", EXPENSE_COLOR),
    "水电": CategoryStyle("expense", "💧", EXPENSE_COLOR),
    "通讯": CategoryStyle("expense", "📱", EXPENSE_COLOR),
    "手机": CategoryStyle("expense", "📞", EXPENSE_COLOR),
    "网络": CategoryStyle("expense", "🌐", EXPENSE_COLOR),
    "旅行": CategoryStyle("expense", "🧳", EXPENSE_COLOR),
    "酒店": CategoryStyle("expense", "🏨", EXPENSE_COLOR),
    "门票": CategoryStyle("expense", "🎫", EXPENSE_COLOR),
    "健身": CategoryStyle("expense", "💪", EXPENSE_COLOR),
    "美容": CategoryStyle("expense", "💄", EXPENSE_COLOR),
    "服饰": CategoryStyle("expense", "👕", EXPENSE_COLOR),
    "数码": CategoryStyle("expense", "💻", EXPENSE_COLOR),
    "家居": CategoryStyle("expense", "🏠", EXPENSE_COLOR),
    "其他支出": CategoryStyle("expense", "💸", EXPENSE_COLOR),
}

# Name of the catch-all category per type, used when nothing matched.
FALLBACK_CATEGORY_NAMES: dict[str, str] = {
    "income": "其他收入",
    "expense": "其他支出",
}

# Ensured before auto-categorization whenever a transaction has a description.
COMMON_EXPENSE_CATEGORIES: tuple[str, ...] = (
    "餐饮",
    "交通",
    "购物",
    "娱乐",
    "医疗",
    "教育",
    "住房",
    "生活缴费",
)


def _build_lexicon(raw: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
    lexicon = {}
    for name, keywords in raw.items():
        normalized = (kw.strip().lower() for kw in (name, *keywords))
        lexicon[name] = tuple(dict.fromkeys(kw for kw in normalized if kw))
    return lexicon


KEYWORD_LEXICON: dict[str, tuple[str, ...]] = _build_lexicon(_RAW_KEYWORDS)


@dataclass(frozen=True)
class KeywordMatch:
    category_name: str
    keyword: str


def match_keywords(description: str | None) -> list[KeywordMatch]:
    """Find every lexicon keyword contained in a description.

    Matches are ordered by keyword length, longest first. Equal lengths keep
    lexicon order (category order, then keyword order within the category).
    """
    if not description:
        return []

    text = description.lower()
    matches = [
        KeywordMatch(name, keyword)
        for name, keywords in KEYWORD_LEXICON.items()
        for keyword in keywords
        if keyword in text
    ]
    # sorted() is stable, so ties stay in lexicon order
    return sorted(matches, key=lambda m: len(m.keyword), reverse=True)


def best_category_name(description: str | None) -> str | None:
    """Category name whose longest keyword occurs in the description, if any."""
    matches = match_keywords(description)
    return matches[0].category_name if matches else None


def style_for(name: str, type: str) -> CategoryStyle:
    """Presentation attributes for an automatically created category.

    Lexicon attributes apply only when they are for the requested type;
    otherwise the generic box icon is used.
    """
    style = CATEGORY_STYLES.get(name)
    if style is not None and style.type == type:
        return style
    return CategoryStyle(type=type, icon=DEFAULT_ICON, color=EXPENSE_COLOR)
